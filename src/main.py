import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import datetime

# Add project root to sys.path to allow imports from 'src'
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.common.config.manager import ConfigManager
from src.common.exceptions import DelayRiskError
from src.common.logging import setup_logger
from src.prediction.application.builder import DelayRiskApplicationBuilder
from src.prediction.domain.entities import TransportType
from src.prediction.infrastructure.persistence.codec import TRANSPORT_CODES, decode_code
from src.prediction.presentation.api.mappers import (
    to_patterns_response, to_prediction_response, to_station_response
)

logger = setup_logger("src", logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Delay risk engine. Extra key=value arguments override the configuration."
    )
    parser.add_argument('--profile', default='default', help="Config profile under conf/prediction")
    parser.add_argument('--config-dir', default='conf', help="Configuration directory")
    subparsers = parser.add_subparsers(dest='command', required=True)

    transport_choices = sorted(TRANSPORT_CODES.values())

    predict = subparsers.add_parser('predict', help="Delay risk for a route at a location")
    predict.add_argument('--transport', choices=transport_choices, default='train')
    predict.add_argument('--route', required=True)
    predict.add_argument('--location', required=True)
    predict.add_argument('--time', type=datetime.fromisoformat, default=None, help="ISO 8601, defaults to now")

    route = subparsers.add_parser('route', help="Delay risk for the first and last station of a route")
    route.add_argument('--transport', choices=transport_choices, default='train')
    route.add_argument('--route', required=True)
    route.add_argument('--time', type=datetime.fromisoformat, default=None)

    subparsers.add_parser('status', help="Knowledge base diagnostics")
    subparsers.add_parser('patterns', help="Aggregate delay patterns")

    export = subparsers.add_parser('export', help="Export incidents to CSV")
    export.add_argument('--output', default='data/exports/incidents.csv')

    subparsers.add_parser('reset', help="Drop every stored incident")
    return parser


def main(argv=None):
    """
    Command line entry point for the delay risk engine.
    """
    parser = build_parser()
    args, overrides = parser.parse_known_args(argv)

    try:
        cfg = ConfigManager(args.config_dir).load_prediction_config(args.profile, overrides)
        service = DelayRiskApplicationBuilder(cfg).build_service()
    except (FileNotFoundError, DelayRiskError) as e:
        logger.error(f"Failed to start: {e}")
        return 1

    if args.command == 'predict':
        transport_type = decode_code(TransportType, args.transport)
        prediction = asyncio.run(service.predict(transport_type, args.route, args.location, args.time))
        print(to_prediction_response(prediction).model_dump_json(indent=2))
    elif args.command == 'route':
        transport_type = decode_code(TransportType, args.transport)
        predictions = asyncio.run(service.predict_route_delays(args.route, transport_type, args.time))
        print(json.dumps([to_station_response(p).model_dump(mode='json') for p in predictions], indent=2))
    elif args.command == 'status':
        print(json.dumps(service.status(), indent=2, default=str))
    elif args.command == 'patterns':
        print(to_patterns_response(service.patterns()).model_dump_json(indent=2))
    elif args.command == 'export':
        count = service.export_incidents(args.output)
        print(f"Exported {count} incidents to {args.output}")
    elif args.command == 'reset':
        service.reset()
        print("Knowledge base reset")
    return 0


if __name__ == "__main__":
    sys.exit(main())
