"""Point function and category classification.

Classification runs over the lower-cased words of the expanded name, so it
sees "Zone Temperature Setpoint" rather than "ZN-T_SP".
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bacmap.models import ObjectType, PointCategory, PointFunction

_WORD = re.compile(r"[a-z0-9]+")

TEMPERATURE = frozenset({"temperature", "temp"})
SETPOINT = frozenset({"setpoint"})
FLOW = frozenset({"flow", "airflow", "cfm", "gpm"})
COMMAND = frozenset({"command"})
PRESSURE = frozenset({"pressure"})
DAMPER = frozenset({"damper"})
VALVE = frozenset({"valve"})
FAN = frozenset({"fan"})
PUMP = frozenset({"pump"})
STATUS = frozenset({"status"})
ALARM = frozenset({"alarm", "fault", "fail"})
HUMIDITY = frozenset({"humidity"})
CO2 = frozenset({"co2"})
ENERGY = frozenset({"energy"})
POWER = frozenset({"power"})
METER = frozenset({"meter"})
OCCUPANCY = frozenset({"occupancy", "occupied", "unoccupied"})


@dataclass(frozen=True)
class FunctionRule:
    """Assigns ``function`` when every word group intersects the word set.

    Attributes:
        function: Point function produced by this rule
        requires: Word groups; each must contribute at least one word
    """

    function: PointFunction
    requires: tuple[frozenset[str], ...]

    def matches(self, words: frozenset[str]) -> bool:
        return all(group & words for group in self.requires)


# First match wins
FUNCTION_RULES: tuple[FunctionRule, ...] = (
    FunctionRule(PointFunction.TEMPERATURE_SETPOINT, (TEMPERATURE, SETPOINT)),
    FunctionRule(PointFunction.TEMPERATURE_SENSOR, (TEMPERATURE,)),
    FunctionRule(PointFunction.AIRFLOW_SETPOINT, (FLOW, SETPOINT)),
    FunctionRule(PointFunction.AIRFLOW_COMMAND, (FLOW, COMMAND)),
    FunctionRule(PointFunction.AIRFLOW_SENSOR, (FLOW,)),
    FunctionRule(PointFunction.PRESSURE_SETPOINT, (PRESSURE, SETPOINT)),
    FunctionRule(PointFunction.PRESSURE_SENSOR, (PRESSURE,)),
    FunctionRule(PointFunction.DAMPER_POSITION, (DAMPER,)),
    FunctionRule(PointFunction.VALVE_POSITION, (VALVE,)),
    FunctionRule(PointFunction.FAN_STATUS, (FAN, STATUS)),
    FunctionRule(PointFunction.PUMP_STATUS, (PUMP, STATUS)),
    FunctionRule(PointFunction.ALARM_STATUS, (ALARM,)),
    FunctionRule(PointFunction.HUMIDITY_SENSOR, (HUMIDITY,)),
    FunctionRule(PointFunction.CO2_SENSOR, (CO2,)),
    FunctionRule(PointFunction.ENERGY_METER, (ENERGY,)),
    FunctionRule(PointFunction.ENERGY_METER, (POWER, METER)),
    FunctionRule(PointFunction.POWER_SENSOR, (POWER,)),
    FunctionRule(PointFunction.OCCUPANCY_STATUS, (OCCUPANCY,)),
)

_COMMAND_FUNCTIONS = frozenset(
    {
        PointFunction.TEMPERATURE_SETPOINT,
        PointFunction.AIRFLOW_SETPOINT,
        PointFunction.AIRFLOW_COMMAND,
        PointFunction.PRESSURE_SETPOINT,
    }
)
_STATUS_FUNCTIONS = frozenset(
    {
        PointFunction.FAN_STATUS,
        PointFunction.PUMP_STATUS,
        PointFunction.ALARM_STATUS,
        PointFunction.OCCUPANCY_STATUS,
    }
)


def expanded_words(text: str | None) -> frozenset[str]:
    """Lower-cased alphanumeric words of an expanded name."""
    if not text:
        return frozenset()
    words = set(_WORD.findall(text.lower()))
    # "Carbon Dioxide" reads the same as "CO2"
    if {"carbon", "dioxide"} <= words:
        words.add("co2")
    return frozenset(words)


def classify_function(words: frozenset[str]) -> PointFunction:
    """Point function from the first matching rule, else unknown."""
    for rule in FUNCTION_RULES:
        if rule.matches(words):
            return rule.function
    return PointFunction.UNKNOWN


def classify_category(
    function: PointFunction, object_type: ObjectType | None = None
) -> PointCategory:
    """Category from the point function, falling back to the BACnet object type.

    Args:
        function: Classified point function
        object_type: BACnet object type, used only when function is unknown

    Returns:
        PointCategory (unknown when neither source decides)
    """
    if function in _COMMAND_FUNCTIONS:
        return PointCategory.COMMAND
    if function in _STATUS_FUNCTIONS:
        return PointCategory.STATUS
    if function != PointFunction.UNKNOWN:
        return PointCategory.SENSOR

    if object_type is None:
        return PointCategory.UNKNOWN
    if object_type == ObjectType.BINARY_INPUT:
        return PointCategory.STATUS
    if object_type.is_input:
        return PointCategory.SENSOR
    return PointCategory.COMMAND
