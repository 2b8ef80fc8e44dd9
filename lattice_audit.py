# lattice_audit.py

"""
================================================================================
LATTICE AUDIT SCRIPT
================================================================================
This script is a command-line tool for checking the lattice tables of a kernel
profile against brute-force geometry, and for printing a few reference noise
values for a seed. Any defect in the tables makes the script exit non-zero.

Usage:
    python lattice_audit.py --config path/to/your/config.json
    python lattice_audit.py --seed 1234 --profile narrow --samples 128
================================================================================
"""
import sys
import json
import logging
import argparse
from tqdm import tqdm

from simplex_field import config as DEFAULTS
from simplex_field.generator import create_generator
from simplex_field.lattice import get_geometry, audit_regions, region_count

# Coordinates at which reference values are reported.
REFERENCE_POINTS = [
    (0.0, 0.0, 0.0, 0.0),
    (0.5, -1.25, 3.75, 0.125),
    (101.3, -7.7, 12.01, -3.3),
]


def load_noise_parameters(config_path: str) -> dict:
    """Reads generator parameters from JSON, either top-level or under 'noise_parameters'."""
    with open(config_path, 'r') as f:
        config = json.load(f)
    return config.get('noise_parameters', config)


def log_reference_values(generator, logger: logging.Logger):
    logger.info("--- Reference Values ---")
    for x, y, z, w in REFERENCE_POINTS:
        logger.info(f"  noise2({x}, {y}) = {generator.noise2(x, y)!r}")
        logger.info(f"  noise3_classic({x}, {y}, {z}) = {generator.noise3_classic(x, y, z)!r}")
        if hasattr(generator, 'noise4_classic'):
            logger.info(f"  noise4_classic({x}, {y}, {z}, {w}) = {generator.noise4_classic(x, y, z, w)!r}")


def run_audit(config_path: str = None, seed: int = None, profile: str = None, samples: int = 64) -> int:
    """
    Audits the lattice tables for a profile and logs reference values.

    Returns:
        int: The process exit code. 0 when the tables are sound, 1 when any
        defect was found, 2 when the configuration could not be used.
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("LatticeAudit")

    # --- 1. Resolve Parameters ---
    params = {}
    if config_path:
        logger.info(f"Loading configuration from: {config_path}")
        try:
            params = load_noise_parameters(config_path)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 2
    if seed is not None:
        params['seed'] = seed
    if profile is not None:
        params['profile'] = profile
    profile = params.get('profile', DEFAULTS.DEFAULT_PROFILE)

    try:
        generator = create_generator(params.get('seed', DEFAULTS.DEFAULT_SEED), profile, logger)
    except ValueError as e:
        logger.critical(str(e))
        return 2

    # --- 2. Audit the Lattice Tables ---
    geometry = get_geometry(profile)
    logger.info(f"Auditing '{profile}' lattice tables with {samples} samples per region...")
    defects = []
    regions = audit_regions(geometry, samples=samples)
    for _, region_defects in tqdm(regions, total=region_count(geometry), desc="Auditing Regions"):
        for defect in region_defects:
            logger.error(defect)
        defects += region_defects

    # --- 3. Report ---
    log_reference_values(generator, logger)
    if defects:
        logger.error(f"FAILURE: {len(defects)} lattice defect(s) found.")
        return 1
    logger.info("SUCCESS: Lattice tables are complete and minimal.")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Audits the lattice tables of the noise engine.")
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a JSON configuration file with 'seed' and 'profile' keys."
    )
    parser.add_argument("--seed", type=int, help="Noise seed. Overrides the config file.")
    parser.add_argument(
        "--profile",
        type=str,
        choices=sorted(DEFAULTS.KERNEL_PROFILES),
        help="Kernel profile. Overrides the config file."
    )
    parser.add_argument("--samples", type=int, default=64, help="Sample points per lattice region.")
    args = parser.parse_args()

    sys.exit(run_audit(args.config, args.seed, args.profile, args.samples))
