"""
Photoelectric Simulator Application Entry Point

Command-line front end for the experiment model: selects a material and
light settings, takes a single reading or a full voltage sweep, prints the
readouts and statistics, and optionally saves the data and an I-V plot.
"""

import sys
import os
import time
from typing import Optional, List

# When running the module directly (python main.py) the package imports
# using relative paths fail because there's no parent package. Add the
# repository root to sys.path so absolute imports work in both modes.
if __package__ is None or __package__ == "":
    _this_file = os.path.abspath(__file__)
    _package_dir = os.path.dirname(_this_file)
    _repo_root = os.path.dirname(_package_dir)
    if _repo_root not in sys.path:
        sys.path.insert(0, _repo_root)

from common.config import reload_config, ConfigurationError
from common.utils import DataExportError, TieredLogger, get_error, get_logger
from photoelectric.models import (
    MATERIALS,
    PhotoelectricError,
    PhotoelectricExperimentModel,
    find_material,
)
from photoelectric.utils import PhotoelectricDataExporter, plot_iv_curves

_logger = get_logger("photoelectric")


def resolve_material_index(key: str) -> int:
    """
    Resolve a --material value to a catalog index.

    Accepts an index, a symbol ("Cs"), a bare name ("cesium") or the full
    catalog name.

    Raises:
        ValueError: If nothing in the catalog matches
    """
    if key.strip().isdigit():
        return int(key)
    material = find_material(key)
    if material is None:
        choices = ", ".join(m.symbol for m in MATERIALS)
        raise ValueError(f"Unknown material '{key}' (choose one of {choices})")
    return MATERIALS.index(material)


def build_parser():
    """Create the command-line argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Photoelectric Effect Measurement Simulator'
    )
    parser.add_argument('--material', default=None,
                        help='Cathode material: index, symbol or name (default: Cesium)')
    parser.add_argument('--wavelength', type=float, default=None,
                        help='Light wavelength in nm')
    parser.add_argument('--intensity', type=float, default=None,
                        help='Light intensity in uW/cm^2')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Noisy readings averaged per point')
    parser.add_argument('--noise', type=float, default=None,
                        help='Relative noise level in [0, 1)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducible readings')
    parser.add_argument('--voltage', type=float, default=None,
                        help='Applied voltage for a single measurement')
    parser.add_argument('--sweep', action='store_true',
                        help='Sweep the applied voltage instead of a single measurement')
    parser.add_argument('--min', dest='min_v', type=float, default=None,
                        help='Sweep start voltage')
    parser.add_argument('--max', dest='max_v', type=float, default=None,
                        help='Sweep stop voltage')
    parser.add_argument('--step', dest='step_v', type=float, default=None,
                        help='Sweep step voltage')
    parser.add_argument('--output', default=None,
                        help="CSV file to save the data to ('auto' for the dated default name)")
    parser.add_argument('--plot', default=None,
                        help='Image file to save the I-V plot to')
    parser.add_argument('--no-delay', action='store_true',
                        help='Skip the simulated settling delay between samples')
    parser.add_argument('--config', default=None,
                        help='JSON file overriding the built-in settings')
    parser.add_argument('--log-dir', default=None,
                        help='Directory for the debug log file')
    parser.add_argument('--debug', action='store_true',
                        help='Show debug messages on the console (staff mode)')
    return parser


def print_readouts(model: PhotoelectricExperimentModel) -> None:
    """Print the physics readouts for the current settings."""
    params = model.get_parameters()
    readouts = model.get_readouts()
    if params["material"] is None:
        print("Material:           none selected")
        return
    print(f"Material:           {params['material']} "
          f"(phi = {params['work_function_ev']:.2f} eV)")
    print(f"Wavelength:         {params['wavelength_nm']:.1f} nm")
    print(f"Intensity:          {params['intensity_uw_cm2']:.1f} uW/cm^2")
    print(f"Photon energy:      {readouts['photon_energy_ev']:.2f} eV")
    print(f"Max kinetic energy: {readouts['max_kinetic_energy_ev']:.2f} eV")
    print(f"Stopping potential: {readouts['stopping_potential_v']:.2f} V")


def print_statistics(model: PhotoelectricExperimentModel) -> None:
    """Print the statistics panel values."""
    stats = model.get_statistics()
    threshold = stats["threshold_voltage"]
    correlation = stats["correlation"]
    print(f"Data points:        {stats['data_points']}")
    print(f"Threshold voltage:  "
          f"{'--' if threshold is None else f'{threshold:.2f} V'}")
    print(f"Correlation (r):    "
          f"{'--' if correlation is None else f'{correlation:.3f}'}")
    print(f"Noise level:        {stats['noise_level'] * 100:.0f}%")


def run_sweep(model: PhotoelectricExperimentModel, args) -> bool:
    """
    Run a background sweep, stopping it cleanly on Ctrl+C.

    Returns:
        bool: False if the sweep failed with an unexpected error
    """
    model.start_sweep(args.min_v, args.max_v, args.step_v)
    try:
        while not model.wait_for_completion(timeout=0.2):
            pass
    except KeyboardInterrupt:
        model.stop_sweep()
        model.wait_for_completion()
    return model.sweep_error is None


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run the simulator with command-line arguments.

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)

    if args.debug:
        TieredLogger.set_staff_debug_mode(True)

    try:
        config = reload_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 2

    if args.no_delay:
        config["sweep"]["sample_delay_ms"] = 0

    log_dir = args.log_dir or config["logging"].get("log_dir")
    if log_dir:
        log_file = _logger.add_file_handler(log_dir)
        if log_file:
            _logger.info(f"Debug log: {log_file}")

    model = PhotoelectricExperimentModel(config, seed=args.seed)

    try:
        if args.material is not None:
            model.select_material(resolve_material_index(args.material))
        overrides = {
            "wavelength_nm": args.wavelength,
            "intensity_uw_cm2": args.intensity,
            "measurement_rounds": args.rounds,
            "noise_level": args.noise,
            "voltage_v": args.voltage,
        }
        model.set_parameters(**{k: v for k, v in overrides.items() if v is not None})

        print_readouts(model)
        print()

        start = time.monotonic()
        if args.sweep:
            if not run_sweep(model, args):
                print(f"Error: sweep failed: {model.sweep_error}")
                return 1
        else:
            point = model.perform_single_measurement()
            print(f"I({point.voltage:+.2f} V) = {point.current:.4f} "
                  f"± {point.error:.4f} nA")
        _logger.debug(f"Measurement took {time.monotonic() - start:.2f} s")

        print()
        print_statistics(model)

        if args.output:
            exporter = PhotoelectricDataExporter(config["export"])
            file_path = exporter.generate_filename() if args.output == "auto" else args.output
            path = exporter.export(file_path, model.dataset, model.params.noise_level)
            print(f"Data saved to {path}")

        if args.plot:
            plot_iv_curves(model.dataset, args.plot, config["plot"])
            print(f"Plot saved to {args.plot}")

    except DataExportError as e:
        template = get_error("no_data_to_export" if len(model.dataset) == 0 else "data_save_failed")
        _logger.student_error(template.title, str(e), template.causes, template.actions)
        return 1
    except (ValueError, PhotoelectricError) as e:
        print(f"Error: {e}")
        return 1

    return 0


def main():
    """Main entry point for the photoelectric simulator."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
