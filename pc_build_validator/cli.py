"""
Command-line interface for the PC Build Validator.
"""

import argparse
import sys
from typing import List, Optional

from .analysis import create_analyzer
from .config import OUTPUT_FORMATS, load_config, get_default_config_path
from .exceptions import PCBuildValidatorError
from .logging_config import get_logger, setup_logging, setup_logging_from_config
from .parsers import BuildParserFactory
from .reporting import get_reporter
from .version import get_full_name_with_version

logger = get_logger('cli')

EXIT_COMPATIBLE = 0
EXIT_ISSUES_FOUND = 1
EXIT_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pc-build-validator',
        description='Check a PC build for electrical and physical compatibility.',
        epilog=(
            'Exit codes: 0 = compatible, 1 = blocking issues found, '
            '2 = invalid input or configuration.'
        ),
    )
    parser.add_argument('build_file', help='Build file (.json, .yaml or .yml)')
    parser.add_argument('-f', '--format', choices=OUTPUT_FORMATS, default=None,
                        help='Output format (default: text, or output.default_format from config)')
    parser.add_argument('-o', '--output', help='Write the report to this file (required for excel)')
    parser.add_argument('-c', '--config', help='YAML configuration file')
    parser.add_argument('--knowledge-base', nargs='+', metavar='FILE', default=[],
                        help='Extra hardware table files loaded on top of the bundled tables')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (default: INFO)')
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose log format')
    parser.add_argument('--detailed', action='store_true',
                        help='Include specifications and power breakdown in text output')
    parser.add_argument('--no-color', action='store_true', help='Disable colored text output')
    parser.add_argument('--version', action='version', version=get_full_name_with_version())
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the validator.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config or get_default_config_path())
    except PCBuildValidatorError as e:
        setup_logging(args.log_level or "INFO", args.log_file, args.verbose)
        logger.error(str(e))
        return EXIT_ERROR

    setup_logging_from_config(config.logging, args.log_level, args.log_file, args.verbose)

    output_format = args.format or config.output.default_format
    if output_format == 'excel' and not args.output:
        logger.error("Excel output requires an output file (-o/--output)")
        return EXIT_ERROR

    if args.knowledge_base:
        config.knowledge_base.files = list(config.knowledge_base.files) + list(args.knowledge_base)

    use_colors = False if args.no_color else config.output.use_colors
    if args.output:
        use_colors = False

    try:
        build = BuildParserFactory().parse_file(args.build_file)
        analyzer = create_analyzer(config)
        analysis = analyzer.analyze(build)
        analysis.source_file = args.build_file

        reporter = get_reporter(output_format, use_colors=use_colors,
                                detailed=args.detailed or config.output.detailed)
        content = reporter.generate_report(analysis, args.output)
    except PCBuildValidatorError as e:
        logger.error(str(e))
        return EXIT_ERROR

    if args.output:
        logger.info(f"Report written to {args.output}")
    else:
        print(content)

    return EXIT_COMPATIBLE if analysis.report.is_compatible else EXIT_ISSUES_FOUND


if __name__ == '__main__':
    sys.exit(main())
