#!/usr/bin/env python3
"""Check the Smart Agent receivers of a collector config file."""

import argparse
import json
import logging
import sys
from os import environ
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from pydantic import ValidationError

from smartagent_receiver import constants
from smartagent_receiver.config import ReceiverConfig
from smartagent_receiver.errors import ConfigError
from smartagent_receiver.loader import load_config_file
from smartagent_receiver.settings import LoaderSettings


class Args(argparse.Namespace):
    config: Path | None
    receiver: list[str] | None
    no_validate: bool
    log_level: str
    rich_logs: bool
    print_config_and_exit: bool
    check_metric: str | None
    dimension: list[tuple[str, str]] | None


logger = logging.getLogger(__name__)


def parse_dimension(value: str) -> tuple[str, str]:
    """Parse a ``key=value`` dimension argument."""
    key, sep, dim_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(
            f"dimension must be given as key=value, got {value!r}"
        )
    return key, dim_value


def parse_args() -> Args:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Smart Agent receiver config checker",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to the collector YAML configuration file. Also accepted in the {constants.CONFIG_ENV_VAR} envvar.",
    )

    parser.add_argument(
        "--receiver",
        action="append",
        help="Only report on this receiver instance (repeatable), e.g. smartagent/redis",
    )

    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Only bind the receivers, skip validation",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    parser.add_argument(
        "--print-config-and-exit",
        action="store_true",
        help="Print the resolved receiver configuration as JSON and exit",
    )

    parser.add_argument(
        "--check-metric",
        help="Report whether a datapoint with this metric name would be excluded by each receiver",
    )

    parser.add_argument(
        "--dimension",
        action="append",
        type=parse_dimension,
        help="Dimension of the datapoint given to --check-metric, as key=value (repeatable)",
    )

    return cast(Args, parser.parse_args())


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        from rich.logging import RichHandler
        from rich.console import Console

        # Log to stderr so JSON printed on stdout stays parseable
        console = Console(stderr=True)

        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[
                RichHandler(
                    console=console,
                    show_path=True,
                    show_time=True,
                    show_level=True,
                    markup=False,
                    rich_tracebacks=True,
                )
            ],
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format=constants.LOG_FORMAT,
        )


T = TypeVar("T")


def first_not_none(*values: T | None) -> T | None:
    for v in values:
        if v is not None:
            return v
    return None


def receiver_to_dict(config: ReceiverConfig) -> dict[str, Any]:
    """Render a receiver config with the key names used in the config file."""
    return {
        "type": config.type_val,
        "name": config.name_val,
        "endpoint": config.endpoint,
        constants.DIMENSION_CLIENTS_KEY: list(config.dimension_clients),
        "monitor": config.monitor_config.model_dump(mode="json", by_alias=True),
    }


def main() -> int:
    """Main function."""
    args = parse_args()

    configure_logging(args.log_level, args.rich_logs)

    try:
        settings = LoaderSettings(
            config_file=first_not_none(
                args.config, environ.get(constants.CONFIG_ENV_VAR)
            ),
            validate_receivers=not args.no_validate,
            receiver_names=args.receiver or [],
        )

        receivers = load_config_file(
            settings.config_file, validate=settings.validate_receivers
        )

        if settings.receiver_names:
            unknown = [n for n in settings.receiver_names if n not in receivers]
            if unknown:
                logger.error("Unknown receivers requested: %s", ", ".join(unknown))
                return 1
            receivers = {n: receivers[n] for n in settings.receiver_names}

        if args.print_config_and_exit:
            logger.info("Printing resolved configuration")
            rendered = {name: receiver_to_dict(cfg) for name, cfg in receivers.items()}
            print(json.dumps(rendered, indent=2, sort_keys=True))
            return 0

        if args.check_metric:
            dimensions = dict(args.dimension or [])
            for name, cfg in receivers.items():
                excluded = cfg.datapoint_filter().matches(args.check_metric, dimensions)
                print(f"{name}: {'excluded' if excluded else 'kept'}")
            return 0

        for name, cfg in receivers.items():
            logger.info("%s: monitor type %s OK", name, cfg.monitor_config.type)

    except ValidationError as e:
        logger.error(
            "Invalid settings\n"
            + "\n".join(
                [
                    f"{'.'.join([str(loc) for loc in err['loc']])}: {err['msg']} (got {err['input']})"
                    for err in e.errors()
                ]
            )
        )
        return 1
    except ConfigError as e:
        logger.error("Invalid receiver configuration: %s", e)
        return 1
    except yaml.YAMLError as e:
        logger.error("YAML parsing error: %s", e)
        return 1
    except OSError as e:
        logger.error("Cannot read configuration: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 0
    except Exception as e:
        logger.error("Error checking receivers: %s", e, exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
