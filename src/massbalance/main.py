"""Command-line entry point for the mass and balance calculator.

Examples:
    massbalance list
    massbalance calc SE-LRO --station pilot=75 --station copilot=75 --fuel 50 --burn 20
    massbalance calc LN-FTM --sheet sheets/ln-ftm.yaml --unit lbs
"""

import argparse
import sys
from pathlib import Path

from massbalance.aircraft import AircraftConfig, AircraftNotFoundError, AircraftRegistry
from massbalance.core.config import ConfigError
from massbalance.core.logging_system import (
    LoggingError,
    get_logger,
    initialize_logging,
    shutdown_logging,
)
from massbalance.loading import LoadingSheet, load_loading_sheet
from massbalance.systems.weight_balance import (
    FlightLoadingResult,
    MassBalanceResult,
    clamp_fuel_volume,
    clamp_station_weights,
    evaluate_flight,
)
from massbalance.units import convert_weight, format_cg, format_moment, format_volume, format_weight

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNSAFE = 2


def parse_station_weight(value: str) -> tuple[str, float]:
    """Parse a ``ID=WEIGHT`` command-line value."""
    station_id, sep, weight = value.partition("=")
    if not sep or not station_id:
        raise argparse.ArgumentTypeError(f"expected ID=WEIGHT, got {value!r}")
    try:
        return station_id.strip(), float(weight)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"weight for {station_id!r} is not a number: {weight!r}"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="massbalance", description="Aircraft mass and balance calculator"
    )
    parser.add_argument(
        "--aircraft-dir",
        type=Path,
        help="Directory of aircraft fleet YAML files (default: bundled fleet)",
    )
    parser.add_argument("--log-config", type=Path, help="Logging configuration YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show informational log output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List registered aircraft")

    calc = subparsers.add_parser("calc", help="Calculate takeoff and landing mass and balance")
    calc.add_argument("registration", help="Aircraft registration (e.g., SE-LRO)")
    calc.add_argument(
        "--station",
        action="append",
        type=parse_station_weight,
        default=[],
        metavar="ID=WEIGHT",
        help="Weight at a station, in the aircraft's data unit (repeatable)",
    )
    calc.add_argument("--fuel", type=float, help="Fuel on board at takeoff in liters")
    calc.add_argument("--burn", type=float, help="Planned fuel burn in liters")
    calc.add_argument("--sheet", type=Path, help="Loading sheet YAML file")
    calc.add_argument("--unit", choices=["kg", "lbs"], help="Display unit (default: aircraft's)")
    calc.add_argument(
        "--clamp",
        action="store_true",
        help="Clamp station weights and fuel to their maximums before calculating",
    )

    return parser


def _resolve_sheet(args: argparse.Namespace) -> LoadingSheet:
    """Combine the loading sheet file (if any) with command line overrides."""
    if args.sheet:
        sheet = load_loading_sheet(args.sheet)
        if sheet.registration != args.registration:
            raise ConfigError(
                f"Loading sheet {args.sheet} is for {sheet.registration}, not {args.registration}"
            )
    else:
        sheet = LoadingSheet(registration=args.registration)

    for station_id, weight in args.station:
        sheet.station_weights[station_id] = weight
    if args.fuel is not None:
        sheet.fuel_volume_l = args.fuel
    if args.burn is not None:
        sheet.fuel_burn_l = args.burn
    if sheet.fuel_volume_l < 0 or sheet.fuel_burn_l < 0:
        raise ConfigError("Fuel volume and burn must not be negative")

    return sheet


def _row(label: str, weight: str, moment: str = "") -> str:
    return f"  {label:<24}{weight:>14}{moment:>18}"


def format_phase(
    title: str, result: MassBalanceResult, fuel_weight: float, unit: str, data_unit: str
) -> list[str]:
    """Format one flight phase as report lines."""

    def weight(value: float) -> str:
        return format_weight(convert_weight(value, data_unit, unit), unit)

    def moment(value: float) -> str:
        return format_moment(convert_weight(value, data_unit, unit))

    lines = [f"{title}:", _row("", "Weight", f"Moment ({unit}-in)")]
    lines.append(_row("Empty aircraft", weight(result.empty_weight), moment(result.empty_moment)))
    for station_result in result.stations:
        lines.append(
            _row(
                station_result.station.name,
                weight(station_result.weight),
                moment(station_result.moment),
            )
        )
    lines.append(_row("Fuel", weight(fuel_weight)))
    lines.append(_row("Total", weight(result.total_weight), moment(result.total_moment)))
    lines.append(f"  CG: {format_cg(result.cg_position_in)}")
    lines.append(f"  Within envelope: {'yes' if result.is_within_envelope else 'NO'}")
    return lines


def format_report(
    aircraft: AircraftConfig, sheet: LoadingSheet, flight: FlightLoadingResult, unit: str
) -> str:
    """Format the takeoff/landing report for display."""
    data_unit = aircraft.default_unit
    landing_volume = max(sheet.fuel_volume_l - sheet.fuel_burn_l, 0.0)

    def limit(value: float) -> str:
        return format_weight(convert_weight(value, data_unit, unit), unit)

    lines = [f"{aircraft.registration} - {aircraft.model}"]
    lines.append(
        f"Fuel: {format_volume(sheet.fuel_volume_l, 'liters')} at takeoff, "
        f"{format_volume(landing_volume, 'liters')} at landing"
    )
    lines.append("")
    lines.extend(format_phase("Takeoff", flight.takeoff, flight.takeoff_fuel_weight, unit, data_unit))
    lines.append(
        f"  Max takeoff weight {limit(aircraft.max_takeoff_weight)}: "
        f"{'EXCEEDED' if flight.exceeds_max_takeoff else 'ok'}"
    )
    lines.append("")
    lines.extend(format_phase("Landing", flight.landing, flight.landing_fuel_weight, unit, data_unit))
    if aircraft.max_landing_weight is not None:
        lines.append(
            f"  Max landing weight {limit(aircraft.max_landing_weight)}: "
            f"{'EXCEEDED' if flight.exceeds_max_landing else 'ok'}"
        )
    lines.append("")
    lines.append("SAFE" if flight.is_safe else "NOT SAFE")
    return "\n".join(lines)


def command_list(registry: AircraftRegistry) -> int:
    for model_type in registry.model_types():
        print(registry.model_display_name(model_type))
        for aircraft in registry.by_model_type(model_type):
            print(
                f"  {aircraft.registration:<10}"
                f"empty {format_weight(aircraft.empty_weight, aircraft.default_unit)}"
                f"  CG {format_cg(aircraft.empty_cg_in)}"
            )
    return EXIT_OK


def command_calc(registry: AircraftRegistry, args: argparse.Namespace) -> int:
    logger = get_logger("massbalance.main")

    aircraft = registry.get(args.registration)
    sheet = _resolve_sheet(args)

    unknown = sorted(set(sheet.station_weights) - set(aircraft.station_ids))
    if unknown:
        logger.warning("Ignoring unknown stations for %s: %s", aircraft.registration, ", ".join(unknown))

    if args.clamp:
        sheet.station_weights = clamp_station_weights(aircraft, sheet.station_weights)
        sheet.fuel_volume_l = clamp_fuel_volume(aircraft, sheet.fuel_volume_l)
    else:
        for station_id, weight in sheet.station_weights.items():
            station = aircraft.get_station(station_id)
            if station is not None and station.is_overweight(weight):
                logger.warning(
                    "%s: %.1f is above the station maximum of %.1f",
                    station.name,
                    weight,
                    station.max_weight,
                )

    flight = evaluate_flight(aircraft, sheet.station_weights, sheet.fuel_volume_l, sheet.fuel_burn_l)
    print(format_report(aircraft, sheet, flight, args.unit or aircraft.default_unit))

    logger.info("%s: safe=%s", aircraft.registration, flight.is_safe)
    return EXIT_OK if flight.is_safe else EXIT_UNSAFE


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        0 when the loading is safe (or for ``list``), 2 when it is not, and
        1 on errors.
    """
    args = build_parser().parse_args(argv)

    try:
        initialize_logging(
            args.log_config, use_platform_dir=True, console_level="INFO" if args.verbose else None
        )
    except LoggingError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    logger = get_logger("massbalance.main")

    try:
        if args.aircraft_dir:
            registry = AircraftRegistry.from_directory(args.aircraft_dir)
        else:
            registry = AircraftRegistry.default()

        if args.command == "list":
            return command_list(registry)
        return command_calc(registry, args)
    except AircraftNotFoundError as e:
        logger.error("Unknown aircraft: %s", e.args[0])
        return EXIT_ERROR
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_ERROR
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return EXIT_ERROR
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
