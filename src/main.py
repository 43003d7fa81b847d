"""
Medical Code Extraction Pipeline Main Entry Point

Provides CLI interface for running one extraction stage or all of them.
Initializes logging on startup and runs the stages in order: ICD-O-3 first,
then ICD-10.

By default the run aborts at the first failing stage. With
--continue-on-error (or CONTINUE_ON_ERROR=true) every stage is attempted and
the run exits non-zero if any of them failed.
"""

import argparse
import sys

from src.config import CONTINUE_ON_ERROR, print_configuration
from src.utils.logging_config import setup_logger, get_logger
from src.pipeline.icdo3_extraction import run as run_icdo3
from src.pipeline.icd10_extraction import run as run_icd10

# Execution order is significant
STAGES = {
    "icdo3": run_icdo3,
    "icd10": run_icd10,
}


def run_stages(stage_names, continue_on_error: bool = False) -> bool:
    """
    Run the named stages in order.

    Args:
        stage_names: Keys of STAGES, in execution order
        continue_on_error: Attempt remaining stages after a failure

    Returns:
        True if every stage succeeded
    """
    logger = get_logger("main")
    failed = []

    for name in stage_names:
        logger.info(f"Running stage {name}...")
        try:
            STAGES[name]()
            logger.success(f"Stage {name} completed successfully")
        except Exception as e:
            logger.error(f"Stage {name} failed: {e}")
            logger.exception("Full traceback:")
            failed.append(name)
            if not continue_on_error:
                logger.error("Pipeline aborted due to error")
                return False

    if failed:
        logger.error(f"Failed stages: {', '.join(failed)}")
        return False

    return True


def main(argv=None):
    """
    Main entry point for the Medical Code Extraction Pipeline.

    Initializes logging and coordinates stage execution based on CLI arguments.
    """
    parser = argparse.ArgumentParser(description="Medical Code Extraction Pipeline")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--stage", choices=list(STAGES), help="Run a single stage")
    group.add_argument("--all", action="store_true", help="Run all stages in order (default)")
    parser.add_argument(
        "--continue-on-error",
        action=argparse.BooleanOptionalAction,
        default=CONTINUE_ON_ERROR,
        help="Attempt every stage even if an earlier one fails",
    )
    parser.add_argument("--show-config", action="store_true", help="Print configuration and exit")
    args = parser.parse_args(argv)

    if args.show_config:
        print_configuration()
        return

    # Initialize logging once at startup
    setup_logger()
    logger = get_logger("main")

    logger.info("=" * 80)
    logger.info("Medical Code Extraction Pipeline")
    logger.info("=" * 80)

    stage_names = list(STAGES) if args.all or not args.stage else [args.stage]

    if not run_stages(stage_names, continue_on_error=args.continue_on_error):
        sys.exit(1)

    if len(stage_names) > 1:
        logger.info("=" * 80)
        logger.success("PIPELINE COMPLETED SUCCESSFULLY")
        logger.info("=" * 80)


if __name__ == "__main__":
    main()
