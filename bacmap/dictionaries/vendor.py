"""Vendor-specific acronym tables, vendor aliasing and pattern-based vendor inference."""

from __future__ import annotations

JOHNSON_CONTROLS_ACRONYMS: dict[str, str] = {
    "ZNT": "Zone Temperature",
    "ZNSP": "Zone Setpoint",
    "OATEMP": "Outside Air Temperature",
    "SATEMP": "Supply Air Temperature",
    "RATEMP": "Return Air Temperature",
    "MATEMP": "Mixed Air Temperature",
    "DATEMP": "Discharge Air Temperature",
    "OADMPR": "Outside Air Damper",
    "RADMPR": "Return Air Damper",
    "EADMPR": "Exhaust Air Damper",
    "CLGVLV": "Cooling Valve",
    "HTGVLV": "Heating Valve",
    "CHWVLV": "Chilled Water Valve",
    "HWVLV": "Hot Water Valve",
    "SAFLOW": "Supply Air Flow",
    "RAFLOW": "Return Air Flow",
    "OAFLOW": "Outside Air Flow",
    "EAFLOW": "Exhaust Air Flow",
    "AIRFLW": "Air Flow",
    "SAPRESS": "Supply Air Pressure",
    "RAPRESS": "Return Air Pressure",
    "STPRESS": "Static Pressure",
    "DIFFPR": "Differential Pressure",
    "SUPFAN": "Supply Fan",
    "RETFAN": "Return Fan",
    "EXHFAN": "Exhaust Fan",
    "FANSTS": "Fan Status",
    "COMPSTS": "Compressor Status",
    "ALMSTS": "Alarm Status",
    "RUNSTS": "Run Status",
    "ENBSTS": "Enable Status",
}

SIEMENS_ACRONYMS: dict[str, str] = {
    "T_ZONE": "Zone Temperature",
    "T_SUPPLY": "Supply Temperature",
    "T_RETURN": "Return Temperature",
    "T_OUTSIDE": "Outside Temperature",
    "T_MIXED": "Mixed Temperature",
    "T_DISCHARGE": "Discharge Temperature",
    "T_SETPOINT": "Temperature Setpoint",
    "P_STATIC": "Static Pressure",
    "P_DIFF": "Differential Pressure",
    "P_SUPPLY": "Supply Pressure",
    "P_RETURN": "Return Pressure",
    "F_AIR": "Air Flow",
    "F_SUPPLY": "Supply Flow",
    "F_RETURN": "Return Flow",
    "F_OUTSIDE": "Outside Air Flow",
    "F_EXHAUST": "Exhaust Flow",
    "D_OUTSIDE": "Outside Air Damper",
    "D_RETURN": "Return Air Damper",
    "D_EXHAUST": "Exhaust Air Damper",
    "V_COOLING": "Cooling Valve",
    "V_HEATING": "Heating Valve",
    "FAN_SUPPLY": "Supply Fan",
    "FAN_RETURN": "Return Fan",
    "FAN_EXHAUST": "Exhaust Fan",
    "PUMP_CHW": "Chilled Water Pump",
    "PUMP_HW": "Hot Water Pump",
    "STS_FAN": "Fan Status",
    "STS_PUMP": "Pump Status",
    "STS_ALARM": "Alarm Status",
    "STS_RUN": "Run Status",
}

TRANE_ACRONYMS: dict[str, str] = {
    "ZONETEMP": "Zone Temperature",
    "SUPPLYTEMP": "Supply Temperature",
    "RETURNTEMP": "Return Temperature",
    "OUTDOORTEMP": "Outdoor Temperature",
    "MIXEDTEMP": "Mixed Air Temperature",
    "DISCHARGETEMP": "Discharge Temperature",
    "ZONETEMPSP": "Zone Temperature Setpoint",
    "SUPPLYTEMPSP": "Supply Temperature Setpoint",
    "STATICPRESS": "Static Pressure",
    "DIFFPRESS": "Differential Pressure",
    "STATICPRESSSP": "Static Pressure Setpoint",
    "AIRFLOW": "Air Flow",
    "SUPPLYFLOW": "Supply Air Flow",
    "RETURNFLOW": "Return Air Flow",
    "AIRFLOWSP": "Air Flow Setpoint",
    "MINAIRFLOW": "Minimum Air Flow",
    "MAXAIRFLOW": "Maximum Air Flow",
    "OUTDOORDAMPER": "Outdoor Air Damper",
    "RETURNDAMPER": "Return Air Damper",
    "COOLINGVALVE": "Cooling Valve",
    "HEATINGVALVE": "Heating Valve",
    "REHEATVALVE": "Reheat Valve",
    "SUPPLYFAN": "Supply Fan",
    "RETURNFAN": "Return Fan",
    "EXHAUSTFAN": "Exhaust Fan",
    "FANSTATUS": "Fan Status",
    "ALARMSTATUS": "Alarm Status",
    "RUNSTATUS": "Run Status",
}

HONEYWELL_ACRONYMS: dict[str, str] = {
    "RMTEMP": "Room Temperature",
    "SPTEMP": "Supply Temperature",
    "RTTEMP": "Return Temperature",
    "OATEMP": "Outside Air Temperature",
    "MXTEMP": "Mixed Air Temperature",
    "DCTEMP": "Discharge Temperature",
    "RMTSP": "Room Temperature Setpoint",
    "SPTSP": "Supply Temperature Setpoint",
    "STPRES": "Static Pressure",
    "DFPRES": "Differential Pressure",
    "STPSP": "Static Pressure Setpoint",
    "AIRFL": "Air Flow",
    "SPAIRFL": "Supply Air Flow",
    "RTAIRFL": "Return Air Flow",
    "AIRFLSP": "Air Flow Setpoint",
    "OADMP": "Outside Air Damper",
    "RTDMP": "Return Air Damper",
    "EXDMP": "Exhaust Air Damper",
    "CLGVLV": "Cooling Valve",
    "HTGVLV": "Heating Valve",
    "SPFAN": "Supply Fan",
    "RTFAN": "Return Fan",
    "EXFAN": "Exhaust Fan",
}

SCHNEIDER_ACRONYMS: dict[str, str] = {
    "ZN_TEMP": "Zone Temperature",
    "SA_TEMP": "Supply Air Temperature",
    "RA_TEMP": "Return Air Temperature",
    "OA_TEMP": "Outside Air Temperature",
    "MA_TEMP": "Mixed Air Temperature",
    "DA_TEMP": "Discharge Air Temperature",
    "ZN_TEMP_SP": "Zone Temperature Setpoint",
    "SA_TEMP_SP": "Supply Air Temperature Setpoint",
    "SA_PRESS": "Supply Air Pressure",
    "RA_PRESS": "Return Air Pressure",
    "STATIC_PRESS": "Static Pressure",
    "SA_PRESS_SP": "Supply Air Pressure Setpoint",
    "SA_FLOW": "Supply Air Flow",
    "RA_FLOW": "Return Air Flow",
    "OA_FLOW": "Outside Air Flow",
    "SA_FLOW_SP": "Supply Air Flow Setpoint",
    "MIN_FLOW": "Minimum Flow",
    "MAX_FLOW": "Maximum Flow",
    "OA_DAMPER": "Outside Air Damper",
    "RA_DAMPER": "Return Air Damper",
    "CLG_VALVE": "Cooling Valve",
    "HTG_VALVE": "Heating Valve",
    "SA_FAN": "Supply Air Fan",
    "RA_FAN": "Return Air Fan",
}

VENDOR_ACRONYMS: dict[str, dict[str, str]] = {
    "Johnson Controls": JOHNSON_CONTROLS_ACRONYMS,
    "Siemens": SIEMENS_ACRONYMS,
    "Trane": TRANE_ACRONYMS,
    "Honeywell": HONEYWELL_ACRONYMS,
    "Schneider Electric": SCHNEIDER_ACRONYMS,
}

VENDOR_ALIASES: list[tuple[str, tuple[str, ...]]] = [
    ("Johnson Controls", ("johnson", "jci")),
    ("Siemens", ("siemens",)),
    ("Trane", ("trane",)),
    ("Honeywell", ("honeywell",)),
    ("Schneider Electric", ("schneider", "andover", "continuum")),
]

# Substring heuristics, checked in order
_VENDOR_PATTERNS: list[tuple[str, tuple[str, ...]]] = [
    ("Johnson Controls", ("znt", "znsp", "oatemp", "dmpr", "airflw")),
    ("Siemens", ("t_", "p_", "f_", "d_", "v_")),
    ("Trane", ("zonetemp", "supplytemp", "outdoortemp", "staticpress")),
    ("Honeywell", ("rmtemp", "sptemp", "airfl", "stpres")),
    ("Schneider Electric", ("_temp", "_press", "_flow", "_damper")),
]


def resolve_vendor(vendor: str | None) -> str | None:
    """Map a vendor name or alias ("JCI", "Andover") onto a canonical vendor."""
    if not vendor:
        return None

    needle = vendor.strip()
    for canonical in VENDOR_ACRONYMS:
        if canonical.lower() == needle.lower():
            return canonical

    lowered = needle.lower()
    for canonical, aliases in VENDOR_ALIASES:
        if any(alias in lowered for alias in aliases):
            return canonical
    return None


def infer_vendor(point_name: str | None) -> str | None:
    """Guess the vendor from point naming conventions.

    The heuristics are coarse (any "t_" reads as Siemens), so callers only
    use them when explicitly enabled.

    Args:
        point_name: Raw point name

    Returns:
        Canonical vendor name, or None if no pattern matches
    """
    if not point_name:
        return None

    name = point_name.lower()
    for vendor, patterns in _VENDOR_PATTERNS:
        if any(pattern in name for pattern in patterns):
            return vendor
    return None
