"""Command line entry point: ``python -m chix8 rom=path/to/game.ch8``."""

import sys

import hydra
from omegaconf import DictConfig

from chix8.app import run_emulator
from chix8.config import EmulatorConfig
from chix8.errors import Chip8Error
from chix8.logging import ConsoleLogger


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    logger = ConsoleLogger()
    try:
        config = EmulatorConfig.from_dict(cfg)
    except ValueError as error:
        logger.error(f"Invalid configuration: {error}")
        sys.exit(1)

    if config.rom is None:
        logger.error("No ROM given, usage: python -m chix8 rom=<path>")
        sys.exit(1)

    try:
        run_emulator(config, logger)
    except Chip8Error as error:
        logger.error(str(error))
        sys.exit(1)


if __name__ == "__main__":
    main()
