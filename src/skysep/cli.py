#!/usr/bin/env python3
"""Command line interface for skysep trajectory analysis"""

import sys
import argparse
import logging
import json
from pathlib import Path
from typing import List, Optional

from .adapters.flight_import import FlightImportAdapter
from .exceptions import SkysepError
from .pipeline.analysis_pipeline import AnalysisPipeline
from .utils.config import Config


def setup_cli_logging(verbose: bool = False, level_name: Optional[str] = None):
    """Setup CLI logging"""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, (level_name or 'INFO').upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


class SkysepCLI:
    """CLI for ingesting flight plans and analyzing conflicts"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def run(self, args: List[str] = None) -> int:
        """Main entry point"""
        if args is None:
            args = sys.argv[1:]

        parser = self._create_parser()
        parsed_args = parser.parse_args(args)

        if not getattr(parsed_args, 'func', None):
            parser.print_help()
            return 1

        # Execute command
        try:
            return parsed_args.func(parsed_args)
        except KeyboardInterrupt:
            self.logger.info("Operation cancelled by user")
            return 1
        except (SkysepError, OSError) as e:
            self.logger.error(f"Command failed: {e}", exc_info=parsed_args.verbose)
            return 1

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog='skysep',
            description='Flight-plan trajectory conflict detection and resolution scoring',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  skysep ingest data/flights.json
  skysep analyze data/flights.csv --output output/analysis.json --resolutions
            """
        )

        # Global options
        parser.add_argument('--verbose', '-v', action='store_true',
                            help='Enable verbose logging')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_ingest_parser(subparsers)
        self._add_analyze_parser(subparsers)

        return parser

    def _add_ingest_parser(self, subparsers):
        """Add ingest subcommand parser"""
        parser = subparsers.add_parser(
            'ingest',
            help='Validate a JSON/CSV flight file'
        )

        parser.add_argument('input', type=Path,
                            help='Path to flight data (JSON array or CSV)')

        parser.set_defaults(func=self._ingest)

    def _add_analyze_parser(self, subparsers):
        """Add analyze subcommand parser"""
        parser = subparsers.add_parser(
            'analyze',
            help='Detect conflicts and optionally score resolutions'
        )

        parser.add_argument('input', type=Path,
                            help='Path to flight data (JSON array or CSV)')
        parser.add_argument('--output', '-o', type=Path, default=None,
                            help='Write the result JSON here instead of stdout')
        parser.add_argument('--config', type=Path, default=None,
                            help='YAML configuration file')
        parser.add_argument('--step', type=int, default=None,
                            help='Sampling step in seconds (overrides config)')
        parser.add_argument('--spatial-grid', action='store_true',
                            help='Prefilter pairs with a 1-degree spatial grid')
        parser.add_argument('--resolutions', action='store_true',
                            help='Also score resolution candidates')

        parser.set_defaults(func=self._analyze)

    def _ingest(self, args) -> int:
        setup_cli_logging(args.verbose)

        flights = FlightImportAdapter(args.input).load_file()
        print(json.dumps({'count': len(flights)}))
        return 0

    def _analyze(self, args) -> int:
        config = Config.load(args.config, must_exist=args.config is not None)
        setup_cli_logging(args.verbose, config.logging.get('level'))

        if args.step is not None:
            config.analysis['sample_step_seconds'] = args.step
        if args.spatial_grid:
            config.analysis['use_spatial_grid'] = True

        pipeline = AnalysisPipeline(config.to_pipeline_config())

        self.logger.info(f"📂 Loading flight data from {args.input}")
        raw_flights = FlightImportAdapter(args.input).load_file()

        result = pipeline.analyze(raw_flights)
        output = result.to_dict()

        if args.resolutions:
            output.update(pipeline.score_resolutions(result.conflicts).to_dict())

        text = json.dumps(output, indent=2)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(text, encoding='utf-8')
            self.logger.info(f"✅ Results written to {args.output}")
        else:
            print(text)
        return 0


def main(args: List[str] = None) -> int:
    return SkysepCLI().run(args)


if __name__ == '__main__':
    sys.exit(main())
