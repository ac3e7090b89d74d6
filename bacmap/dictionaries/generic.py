"""Generic BACnet acronyms used across vendors and equipment types.

Keys are upper-case. Compound keys keep their separator ("ZN-T", "DMPR_POS")
and match only the same raw spelling. Single letters are left to the
unit-stem tier, which needs a units hint to resolve them.
"""

from __future__ import annotations

GENERIC_ACRONYMS: dict[str, str] = {
    # Compound points
    "ZN-T": "Zone Temperature",
    "SAT": "Supply Air Temperature",
    "RAT": "Return Air Temperature",
    "OAT": "Outside Air Temperature",
    "MAT": "Mixed Air Temperature",
    "DAT": "Discharge Air Temperature",
    "ZAT": "Zone Air Temperature",
    "CSAT": "Cooling Supply Air Temperature",
    "DMPR_POS": "Damper Position",
    "VLV_POS": "Valve Position",
    "SF_SPD": "Supply Fan Speed",
    "BSP": "Building Static Pressure",
    "DPSP": "Duct Pressure Setpoint",
    "SSP": "Static Pressure Setpoint",
    "ZTMP": "Zone Temperature",
    "ZST": "Zone Sensor Temperature",
    "ZCO2": "Zone CO2",
    "ZOVD": "Zone Override",
    "ZS": "Zone Sensor",
    "OAD": "Outside Air Damper",
    "RAD": "Return Air Damper",
    "FSD": "Fire Smoke Damper",
    "FSDA": "Fire Smoke Damper Alarm",
    # Point roles
    "CMD": "Command",
    "CMND": "Command",
    "SP": "Setpoint",
    "SPT": "Setpoint",
    "STPT": "Setpoint",
    "SETPT": "Setpoint",
    "SETPOINT": "Setpoint",
    "ST": "Status",
    "STS": "Status",
    "STAT": "Status",
    "STATUS": "Status",
    "SEN": "Sensor",
    "SENS": "Sensor",
    "FB": "Feedback",
    # Measurements
    "TEMP": "Temperature",
    "TMP": "Temperature",
    "TEMPERATURE": "Temperature",
    "PRESS": "Pressure",
    "PRES": "Pressure",
    "STATIC": "Static",
    "DIFF": "Differential",
    "FLOW": "Flow",
    "FLO": "Flow",
    "AIRFLOW": "Airflow",
    "CFM": "CFM",
    "GPM": "GPM",
    "RH": "Relative Humidity",
    "HUM": "Humidity",
    "CO2": "CO2",
    "PWR": "Power",
    "POWER": "Power",
    "KW": "Power",
    "KWH": "Energy",
    "ENERGY": "Energy",
    "FREQ": "Frequency",
    "AMP": "Current",
    "SPD": "Speed",
    "SPEED": "Speed",
    "RNTM": "Runtime",
    "HRS": "Hours",
    "PCT": "Percent",
    # Substances and air streams
    "SA": "Supply Air",
    "RA": "Return Air",
    "OA": "Outside Air",
    "OSA": "Outside Air",
    "MA": "Mixed Air",
    "EA": "Exhaust Air",
    "DA": "Discharge Air",
    "AIR": "Air",
    "CHW": "Chilled Water",
    "HW": "Hot Water",
    "HHW": "Hot Water",
    "CW": "Condenser Water",
    "STM": "Steam",
    "SUP": "Supply",
    "SPLY": "Supply",
    "RET": "Return",
    "EXH": "Exhaust",
    "EXHAUST": "Exhaust",
    "DISCH": "Discharge",
    # Components
    "DMPR": "Damper",
    "DMP": "Damper",
    "DPR": "Damper",
    "DAMPER": "Damper",
    "POS": "Position",
    "VLV": "Valve",
    "VALVE": "Valve",
    "FAN": "Fan",
    "PMP": "Pump",
    "PUMP": "Pump",
    "SF": "Supply Fan",
    "RF": "Return Fan",
    "EF": "Exhaust Fan",
    "VFD": "VFD",
    "COMP": "Compressor",
    "COND": "Condenser",
    "EVAP": "Evaporator",
    "COIL": "Coil",
    "FILTER": "Filter",
    "ECON": "Economizer",
    "DCV": "Demand Controlled Ventilation",
    # Heating and cooling
    "CLG": "Cooling",
    "COOL": "Cooling",
    "HTG": "Heating",
    "HEAT": "Heating",
    "RHT": "Reheat",
    "PHT": "Preheat",
    # Locations
    "ZN": "Zone",
    "ZONE": "Zone",
    "RM": "Room",
    "ROOM": "Room",
    "SPACE": "Space",
    "BLDG": "Building",
    "FLR": "Floor",
    "DUCT": "Duct",
    # States and modes
    "OCC": "Occupancy",
    "UNOCC": "Unoccupied",
    "ALARM": "Alarm",
    "ALM": "Alarm",
    "ALRM": "Alarm",
    "FAIL": "Fail",
    "OVRD": "Override",
    "OVRDE": "Override",
    "ENA": "Enable",
    "ENB": "Enable",
    "ENABLE": "Enable",
    "DISABLE": "Disable",
    "MODE": "Mode",
    "RUN": "Run",
    "AUTO": "Automatic",
    "MAN": "Manual",
    "HAND": "Hand",
    "HI": "High",
    "LO": "Low",
    "MIN": "Minimum",
    "MAX": "Maximum",
    "LMT": "Limit",
    "LIMIT": "Limit",
    "REQ": "Request",
    "DMD": "Demand",
    "EFF": "Effective",
    "ADJ": "Adjust",
    "AVG": "Average",
    "SYS": "System",
    "SMOKE": "Smoke",
    "SD": "Smoke Detector",
}
