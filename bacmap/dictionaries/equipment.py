"""Equipment-type acronym tables and equipment-type aliasing."""

from __future__ import annotations

AHU_ACRONYMS: dict[str, str] = {
    "MAT": "Mixed Air Temperature",
    "SAT": "Supply Air Temperature",
    "RAT": "Return Air Temperature",
    "OAT": "Outside Air Temperature",
    "LAT": "Leaving Air Temperature",
    "EAT": "Entering Air Temperature",
    "SASP": "Supply Air Static Pressure",
    "RASP": "Return Air Static Pressure",
    "DASP": "Discharge Air Static Pressure",
    "SAF": "Supply Air Flow",
    "RAF": "Return Air Flow",
    "OAF": "Outside Air Flow",
    "EAF": "Exhaust Air Flow",
    "OADMP": "Outside Air Damper",
    "RADMP": "Return Air Damper",
    "EADMP": "Exhaust Air Damper",
    "PREHEAT": "Preheat Coil",
    "COOLING": "Cooling Coil",
    "HEATING": "Heating Coil",
    "SF": "Supply Fan",
    "RF": "Return Fan",
    "EF": "Exhaust Fan",
    "SFVFD": "Supply Fan VFD",
    "RFVFD": "Return Fan VFD",
}

VAV_ACRONYMS: dict[str, str] = {
    "ZT": "Zone Temperature",
    "ZNT": "Zone Temperature",
    "ZN-T": "Zone Temperature",
    "DAT": "Discharge Air Temperature",
    "RHT": "Reheat Temperature",
    "AF": "Airflow",
    "CFM": "Airflow CFM",
    "DAF": "Discharge Airflow",
    "AIRFLOW": "Airflow",
    "FLOW": "Airflow",
    "DMP": "Damper",
    "DMPR": "Damper",
    "DAMPER": "Damper",
    "POS": "Position",
    "POSITION": "Position",
    "RH": "Reheat",
    "REHEAT": "Reheat",
    "RHVLV": "Reheat Valve",
    "HTGVLV": "Heating Valve",
    "ZTSP": "Zone Temperature Setpoint",
    "ZN-TSP": "Zone Temperature Setpoint",
    "AFSP": "Airflow Setpoint",
    "CFMSP": "Airflow Setpoint CFM",
    "MINAF": "Minimum Airflow",
    "MAXAF": "Maximum Airflow",
}

RTU_ACRONYMS: dict[str, str] = {
    "SAT": "Supply Air Temperature",
    "RAT": "Return Air Temperature",
    "OAT": "Outside Air Temperature",
    "ZT": "Zone Temperature",
    "CSAT": "Cooling Supply Air Temperature",
    "HSAT": "Heating Supply Air Temperature",
    "SASP": "Supply Air Static Pressure",
    "SUCT": "Suction Pressure",
    "DISCH": "Discharge Pressure",
    "COMP": "Compressor",
    "HEATSTG": "Heat Stage",
    "COOLSTG": "Cool Stage",
    "ECON": "Economizer",
    "OADMP": "Outside Air Damper",
    "SF": "Supply Fan",
    "SFVFD": "Supply Fan VFD",
    "COND": "Condenser",
    "EVAP": "Evaporator",
    "GAS": "Gas Heat",
    "ELEC": "Electric Heat",
}

FCU_ACRONYMS: dict[str, str] = {
    "ZT": "Zone Temperature",
    "SAT": "Supply Air Temperature",
    "CWT": "Chilled Water Temperature",
    "HWT": "Hot Water Temperature",
    "EWT": "Entering Water Temperature",
    "LWT": "Leaving Water Temperature",
    "FAN": "Fan",
    "FANSPD": "Fan Speed",
    "CWVLV": "Chilled Water Valve",
    "HWVLV": "Hot Water Valve",
    "CLGVLV": "Cooling Valve",
    "HTGVLV": "Heating Valve",
    "ZTSP": "Zone Temperature Setpoint",
    "FANSP": "Fan Speed Setpoint",
    "CLGSP": "Cooling Setpoint",
    "HTGSP": "Heating Setpoint",
}

CHILLER_ACRONYMS: dict[str, str] = {
    "CHWST": "Chilled Water Supply Temperature",
    "CHWRT": "Chilled Water Return Temperature",
    "CWST": "Condenser Water Supply Temperature",
    "CWRT": "Condenser Water Return Temperature",
    "EWT": "Entering Water Temperature",
    "LWT": "Leaving Water Temperature",
    "SUCTP": "Suction Pressure",
    "DISCHP": "Discharge Pressure",
    "OILP": "Oil Pressure",
    "REFP": "Refrigerant Pressure",
    "COMP": "Compressor",
    "EVAP": "Evaporator",
    "COND": "Condenser",
    "EXPV": "Expansion Valve",
    "CHWP": "Chilled Water Pump",
    "CWP": "Condenser Water Pump",
    "CT": "Cooling Tower",
    "KW": "Power",
    "TONS": "Cooling Capacity",
    "EFF": "Efficiency",
    "COP": "Coefficient of Performance",
}

BOILER_ACRONYMS: dict[str, str] = {
    "HWST": "Hot Water Supply Temperature",
    "HWRT": "Hot Water Return Temperature",
    "ST": "Steam Temperature",
    "FGT": "Flue Gas Temperature",
    "AMB": "Ambient Temperature",
    "STP": "Steam Pressure",
    "GASP": "Gas Pressure",
    "WP": "Water Pressure",
    "BURN": "Burner",
    "IGN": "Ignition",
    "GASV": "Gas Valve",
    "HWP": "Hot Water Pump",
    "EFF": "Efficiency",
    "O2": "Oxygen",
    "CO": "Carbon Monoxide",
}

PUMP_ACRONYMS: dict[str, str] = {
    "FLOW": "Flow Rate",
    "GPM": "Flow Rate GPM",
    "HEAD": "Pump Head",
    "PRESS": "Pressure",
    "DISCHP": "Discharge Pressure",
    "SUCTP": "Suction Pressure",
    "VFD": "Variable Frequency Drive",
    "SPEED": "Pump Speed",
    "RPM": "Pump RPM",
    "AMP": "Motor Current",
    "KW": "Power",
    "EFF": "Efficiency",
}

EQUIPMENT_ACRONYMS: dict[str, dict[str, str]] = {
    "AHU": AHU_ACRONYMS,
    "VAV": VAV_ACRONYMS,
    "RTU": RTU_ACRONYMS,
    "FCU": FCU_ACRONYMS,
    "CHILLER": CHILLER_ACRONYMS,
    "BOILER": BOILER_ACRONYMS,
    "PUMP": PUMP_ACRONYMS,
}

# Checked in order; first substring hit wins
EQUIPMENT_ALIASES: list[tuple[str, tuple[str, ...]]] = [
    ("AHU", ("AHU", "AIR HANDLING", "AIR HANDLER")),
    ("VAV", ("VAV", "VARIABLE AIR")),
    ("RTU", ("RTU", "ROOFTOP", "ROOF TOP")),
    ("FCU", ("FCU", "FAN COIL")),
    ("CHILLER", ("CHILLER",)),
    ("BOILER", ("BOILER",)),
    ("PUMP", ("PUMP",)),
]


def resolve_equipment_type(equipment_type: str | None) -> str | None:
    """Map a free-form equipment type onto a canonical table key.

    "Air Handling Unit", "ahu-controller" and "AHU" all resolve to "AHU".

    Args:
        equipment_type: Equipment type as recorded in either inventory

    Returns:
        Canonical key ("AHU", "VAV", ...) or None when nothing matches
    """
    if not equipment_type:
        return None

    normalized = equipment_type.strip().upper().replace("_", " ")
    if normalized in EQUIPMENT_ACRONYMS:
        return normalized

    for canonical, needles in EQUIPMENT_ALIASES:
        if any(needle in normalized for needle in needles):
            return canonical
    return None
