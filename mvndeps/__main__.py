"""Main CLI entry point for mvndeps."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .collector import DepsDevCollector, load_tree
from .exceptions import DependencyPluginError
from .filters import DestFileFilter
from .models import Node, Project
from .output import write_output
from .resolution import DependencyFilterConfig, LocalRepositoryResolver, get_dependency_sets, parse_coordinate
from .tree import OUTPUT_TYPES, TOKEN_STYLES, serialize_dependency_tree

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_level: Optional[str] = None):
    """Configure logging based on verbosity flags."""
    if log_level:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def load_root(args) -> Node:
    """Load the dependency tree named by --input or fetch the one of --artifact."""
    if args.input:
        return load_tree(args.input)
    artifact = parse_coordinate(args.artifact)
    with DepsDevCollector() as collector:
        return collector.collect(artifact)


def emit(content: str, args):
    """Write ``content`` to --output-file, or to stdout without one."""
    if args.output_file:
        write_output(content, args.output_file, args.append_output, args.output_encoding)
        logger.info(f"Wrote dependency output to: {args.output_file}")
    else:
        print(content, end='')


def handle_tree(args):
    """Handle the 'tree' subcommand."""
    setup_logging(args.verbose, args.loglevel)

    if args.skip:
        logger.info("Skipping plugin execution")
        return 0

    try:
        root = load_root(args)
        content = serialize_dependency_tree(
            root,
            output_type=args.output_type,
            tokens=args.tokens,
            includes=args.includes,
            excludes=args.excludes,
        )
        emit(content, args)
    except DependencyPluginError as e:
        logger.error(f"Cannot build dependency tree: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Error reading input file: {e}")
        print(f"Error reading input file: {e}", file=sys.stderr)
        return 1

    return 0


def handle_list(args):
    """Handle the 'list' subcommand."""
    setup_logging(args.verbose, args.loglevel)

    if args.skip:
        logger.info("Skipping plugin execution")
        return 0

    config = DependencyFilterConfig(
        include_scope=args.include_scope,
        exclude_scope=args.exclude_scope,
        include_types=args.include_types,
        exclude_types=args.exclude_types,
        include_classifiers=args.include_classifiers,
        exclude_classifiers=args.exclude_classifiers,
        include_group_ids=args.include_group_ids,
        exclude_group_ids=args.exclude_group_ids,
        include_artifact_ids=args.include_artifact_ids,
        exclude_artifact_ids=args.exclude_artifact_ids,
        exclude_transitive=args.exclude_transitive,
        classifier=args.classifier,
        type=args.type,
    )
    resolver = LocalRepositoryResolver(args.local_repository) if args.local_repository else None
    marked_artifact_filter = None
    if args.output_directory:
        marked_artifact_filter = DestFileFilter(
            args.output_directory,
            overwrite_releases=args.overwrite_releases,
            overwrite_snapshots=args.overwrite_snapshots,
            overwrite_if_newer=args.overwrite_if_newer,
        )

    try:
        root = load_root(args)
        status = get_dependency_sets(
            root,
            Project.from_root(root),
            config,
            resolver=resolver,
            stop_on_failure=args.stop_on_failure,
            marked_artifact_filter=marked_artifact_filter,
        )
        content = status.get_output(args.output_absolute_artifact_filename, args.output_scope, args.sort)
        emit(content, args)
    except DependencyPluginError as e:
        logger.error(f"Cannot list dependencies: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Error reading input file: {e}")
        print(f"Error reading input file: {e}", file=sys.stderr)
        return 1

    return 0


def add_common_arguments(parser: argparse.ArgumentParser):
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--input', help='JSON dependency tree file')
    source.add_argument('--artifact',
                        help='Fetch the tree of groupId:artifactId:version[:packaging[:classifier]] from deps.dev')
    parser.add_argument('--output-file', help='Write to this file instead of stdout')
    parser.add_argument('--append-output', action='store_true',
                        help='Append to the output file instead of overwriting it')
    parser.add_argument('--output-encoding', default='UTF-8', help='Output file encoding. Default: UTF-8')
    parser.add_argument('--skip', action='store_true', help='Do nothing')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')
    parser.add_argument('--loglevel', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Set log level')


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='mvndeps',
        description='Filter, prune and render Maven dependency trees'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Subcommands')

    # Tree command
    tree_parser = subparsers.add_parser('tree', help='Display the dependency tree')
    add_common_arguments(tree_parser)
    tree_parser.add_argument('--output-type', default='text', choices=OUTPUT_TYPES,
                             help='Output format (text, dot, graphml, tgf). Default: text')
    tree_parser.add_argument('--tokens', default='standard', choices=TOKEN_STYLES,
                             help='Text tree indentation (whitespace, standard, extended). Default: standard')
    tree_parser.add_argument('--includes',
                             help='Comma separated [groupId]:[artifactId]:[type]:[version] patterns to show')
    tree_parser.add_argument('--excludes',
                             help='Comma separated [groupId]:[artifactId]:[type]:[version] patterns to hide')
    tree_parser.set_defaults(func=handle_tree)

    # List command
    list_parser = subparsers.add_parser('list', help='List the selected dependencies')
    add_common_arguments(list_parser)
    for option in ('scope', 'types', 'classifiers', 'group-ids', 'artifact-ids'):
        list_parser.add_argument(f'--include-{option}', help=f'Comma separated {option} to include')
        list_parser.add_argument(f'--exclude-{option}', help=f'Comma separated {option} to exclude')
    list_parser.add_argument('--exclude-transitive', action='store_true',
                             help='Only list direct dependencies')
    list_parser.add_argument('--classifier', help='List this classifier of each dependency instead')
    list_parser.add_argument('--type', help='List this type of each dependency instead')
    list_parser.add_argument('--local-repository',
                             help='Resolve the files from this Maven-layout repository directory')
    list_parser.add_argument('--stop-on-failure', action='store_true',
                             help='Fail on the first dependency that cannot be resolved')
    list_parser.add_argument('--no-output-scope', action='store_false', dest='output_scope',
                             help='Leave the scope out of each line')
    list_parser.add_argument('--output-absolute-artifact-filename', action='store_true',
                             help='Append the absolute file of each resolved dependency')
    list_parser.add_argument('--sort', action='store_true', help='Sort each section')
    list_parser.add_argument('--output-directory',
                             help='Report dependencies already copied to this directory as skipped')
    list_parser.add_argument('--overwrite-releases', action='store_true',
                             help='Never skip release dependencies')
    list_parser.add_argument('--overwrite-snapshots', action='store_true',
                             help='Never skip snapshot dependencies')
    list_parser.add_argument('--overwrite-if-newer', action='store_true',
                             help='Do not skip dependencies whose resolved file is newer than the copy')
    list_parser.set_defaults(func=handle_list)

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Execute command
    try:
        return args.func(args)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
