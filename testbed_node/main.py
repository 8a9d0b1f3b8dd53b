#!/usr/bin/env python3
"""
Main entry point for a CoAP testbed node.
Loads the configuration, sets up logging and serves the node's resources
until interrupted.
"""
import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from .config import NodeConfig
from .node import CoAPNode
from .utils.logger import setup_logger


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parses command-line arguments for the node."""
    parser = argparse.ArgumentParser(
        description='CoAP testbed node serving a simulated LED actuator.',
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="""
Examples:
  python -m testbed_node                    # Serve on [::]:5683
  python -m testbed_node --port 5690        # Use a custom CoAP port
  python -m testbed_node --advertise        # Also advertise resources to the display node
"""
    )
    parser.add_argument('--env-file', default='.env', help='Path to the environment configuration file (default: .env)')
    parser.add_argument('--host', help='Address to bind the CoAP server to')
    parser.add_argument('--port', type=int, help='UDP port of the CoAP server')
    parser.add_argument('--log-level', help='Logging level (DEBUG, INFO, WARNING, ERROR)')
    parser.add_argument('--advertise', action='store_true', default=None,
                        help='Periodically advertise resources to the display node')
    parser.add_argument('--no-sensors', action='store_true',
                        help='Only expose the LED actuator')
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> NodeConfig:
    overrides = {}
    if args.host is not None:
        overrides['COAP_HOST'] = args.host
    if args.port is not None:
        overrides['COAP_PORT'] = args.port
    if args.log_level is not None:
        overrides['LOG_LEVEL'] = args.log_level
    if args.advertise is not None:
        overrides['ADVERTISE_ENABLED'] = args.advertise
    if args.no_sensors:
        overrides['ENABLE_SENSORS'] = False
    return NodeConfig(**overrides)


async def run_node(config: NodeConfig, logger: logging.Logger):
    node = CoAPNode(config)
    try:
        await node.run()
    except Exception as e:
        logger.critical(f"An unhandled error occurred during node operation: {e}", exc_info=True)
        raise


def main(argv=None) -> int:
    args = parse_arguments(argv)
    load_dotenv(args.env_file)

    try:
        config = load_config(args)
    except ValidationError as e:
        setup_logger("testbed_node", log_dir=None).critical(f"Invalid configuration:\n{e}")
        return 1

    logger = setup_logger("testbed_node", level=getattr(logging, config.LOG_LEVEL), log_dir=config.LOG_DIR)
    logger.info(f"Starting testbed node: {config.NODE_ID}")
    logger.info(f"Advertising enabled: {config.ADVERTISE_ENABLED}")

    try:
        asyncio.run(run_node(config, logger))
    except KeyboardInterrupt:
        logger.info("Node shutdown initiated by user (KeyboardInterrupt).")
    except Exception:
        return 1
    logger.info("Node gracefully shut down.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
