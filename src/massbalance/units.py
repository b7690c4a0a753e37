"""Unit conversion and display formatting.

The calculator works in whatever consistent unit system the aircraft data is
given in (the bundled data uses kilograms, liters and inches). These helpers
convert for display and for user input in other units.
"""

LBS_PER_KG = 2.20462
GALLONS_PER_LITER = 0.264172

FUEL_DENSITY_AVGAS_KG_PER_LITER = 0.72  # Avgas 100LL
FUEL_DENSITY_AVGAS_LBS_PER_GALLON = 6.0
FUEL_DENSITY_JETA_KG_PER_LITER = 0.8  # Jet-A at 15°C
FUEL_DENSITY_JETA_LBS_PER_GALLON = 6.7

FUEL_DENSITIES_KG_PER_LITER = {
    "avgas": FUEL_DENSITY_AVGAS_KG_PER_LITER,
    "jet-a": FUEL_DENSITY_JETA_KG_PER_LITER,
}

FUEL_DENSITIES_LBS_PER_GALLON = {
    "avgas": FUEL_DENSITY_AVGAS_LBS_PER_GALLON,
    "jet-a": FUEL_DENSITY_JETA_LBS_PER_GALLON,
}

WEIGHT_UNITS = ("kg", "lbs")
VOLUME_UNITS = ("liters", "gallons")


def kg_to_lbs(kg: float) -> float:
    return kg * LBS_PER_KG


def lbs_to_kg(lbs: float) -> float:
    return lbs / LBS_PER_KG


def liters_to_gallons(liters: float) -> float:
    return liters * GALLONS_PER_LITER


def gallons_to_liters(gallons: float) -> float:
    return gallons / GALLONS_PER_LITER


def liters_to_kg(liters: float, density_kg_per_l: float = FUEL_DENSITY_AVGAS_KG_PER_LITER) -> float:
    """Convert a fuel volume in liters to kilograms at the given density."""
    return liters * density_kg_per_l


def gallons_to_lbs(
    gallons: float, density_lbs_per_gal: float = FUEL_DENSITY_AVGAS_LBS_PER_GALLON
) -> float:
    """Convert a fuel volume in US gallons to pounds at the given density."""
    return gallons * density_lbs_per_gal


def fuel_density_for(fuel_type: str) -> float:
    """Get the standard density in kg/L for a fuel type.

    Raises:
        ValueError: If the fuel type is unknown.
    """
    return _lookup_density(FUEL_DENSITIES_KG_PER_LITER, fuel_type)


def _lookup_density(densities: dict[str, float], fuel_type: str) -> float:
    try:
        return densities[fuel_type.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown fuel type: {fuel_type!r} (expected one of {sorted(densities)})"
        ) from None


def _check_weight_unit(unit: str) -> None:
    if unit not in WEIGHT_UNITS:
        raise ValueError(f"Unknown weight unit: {unit!r}")


def _check_volume_unit(unit: str) -> None:
    if unit not in VOLUME_UNITS:
        raise ValueError(f"Unknown volume unit: {unit!r}")


def convert_weight(weight: float, from_unit: str, to_unit: str) -> float:
    """Convert a weight between kg and lbs.

    Examples:
        >>> convert_weight(10, "kg", "kg")
        10
    """
    _check_weight_unit(from_unit)
    _check_weight_unit(to_unit)
    if from_unit == to_unit:
        return weight
    return kg_to_lbs(weight) if from_unit == "kg" else lbs_to_kg(weight)


def fuel_volume_to_weight(
    volume: float, volume_unit: str, weight_unit: str, fuel_type: str = "avgas"
) -> float:
    """Convert a fuel volume to weight.

    Liters use the fuel's density in kg/L and gallons its density in lbs/gal
    (avgas 0.72 and 6.0, jet-a 0.8 and 6.7). The result is then converted to
    the requested weight unit.

    Raises:
        ValueError: If a unit or the fuel type is unknown.
    """
    _check_volume_unit(volume_unit)
    _check_weight_unit(weight_unit)

    if volume_unit == "liters":
        weight_kg = liters_to_kg(volume, fuel_density_for(fuel_type))
        return convert_weight(weight_kg, "kg", weight_unit)

    weight_lbs = gallons_to_lbs(volume, _lookup_density(FUEL_DENSITIES_LBS_PER_GALLON, fuel_type))
    return convert_weight(weight_lbs, "lbs", weight_unit)


def format_weight(weight: float, unit: str) -> str:
    """Format a weight, e.g. "577.0 kg"."""
    return f"{weight:.1f} {unit}"


def format_cg(cg: float) -> str:
    """Format a CG position, e.g. "68.42 in"."""
    return f"{cg:.2f} in"


def format_moment(moment: float) -> str:
    return f"{moment:.1f}"


def format_volume(volume: float, unit: str) -> str:
    """Format a fuel volume, e.g. "50.0 L" or "13.2 gal"."""
    _check_volume_unit(unit)
    return f"{volume:.1f} {'L' if unit == 'liters' else 'gal'}"
