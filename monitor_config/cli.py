#!/usr/bin/env python3
"""
monitor-config CLI entry point
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
import traceback

from monitor_config import __version__
from monitor_config.errors import ConfigNotSavedError, MonitorConfigError
from monitor_config.kscreen import KScreenDoctor
from monitor_config.log import DEFAULT_LOG_FILE, setup_logging
from monitor_config.manager import ApplyResult, LayoutManager
from monitor_config.settings import load_settings
from monitor_config.store import LayoutStore

DESCRIPTION = """\
Configure monitors with kscreen-doctor. This tool allows saving and restoring
multi-monitor layouts, disabling specific monitors, and enabling only the left
or right monitor. Monitor positions and priorities are persisted in a config file.
"""

EPILOG = """\
The monitors passed as arguments will be disabled.
With no arguments, the layout from the config file is applied.
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='monitor-config',
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'monitors',
        nargs='*',
        metavar='MONITOR',
        help='Monitors to disable'
    )
    parser.add_argument(
        '-s', '--save',
        action='store_true',
        help='Save current layout to config file'
    )
    parser.add_argument(
        '-l', '--list',
        action='store_true',
        help='List current monitors'
    )
    parser.add_argument(
        '-L', '--left',
        action='store_true',
        help='Enable only leftmost monitor'
    )
    parser.add_argument(
        '-R', '--right',
        action='store_true',
        help='Enable only rightmost monitor'
    )
    parser.add_argument(
        '-LR', '--left-right',
        dest='left_right',
        action='store_true',
        help='Enable only leftmost and rightmost monitors'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the kscreen-doctor command (or, with --save, the layout) instead of applying it'
    )
    parser.add_argument(
        '--layout-file',
        type=str,
        default=None,
        help='Path to the saved layout (default: ~/.config/monitor_config)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to settings file (default: ~/.config/monitor-config/settings.json)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging'
    )
    parser.add_argument(
        '--logfile',
        type=str,
        default=None,
        help=f'Path to log file (default: {DEFAULT_LOG_FILE})'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__
    )
    return parser.parse_args(argv)


def _report(result: ApplyResult) -> None:
    if result.dry_run:
        print(shlex.join(result.command))


def run(args: argparse.Namespace, manager: LayoutManager) -> int:
    """Dispatch to the selected mode. Mode flags are checked in a fixed order."""
    log = logging.getLogger('monitor_config')

    if args.list:
        print("Monitors:")
        for name in manager.list_monitors():
            print(name)
        return 0

    if args.save and manager.dry_run:
        print(f"Monitor configuration that would be saved to {manager.store.path}:")
        print(manager.preview_save(), end='')
        return 0

    if args.save:
        manager.save()
        print(f"Monitor configuration saved to {manager.store.path}:")
        print(manager.store.read_text(), end='')
        return 0

    if args.monitors and (args.left or args.right or args.left_right):
        log.warning("Ignoring monitor arguments: %s", " ".join(args.monitors))

    if args.left:
        result = manager.apply_left_only()
        print(f"Enabling only {result.enabled[0]}")
    elif args.right:
        result = manager.apply_right_only()
        print(f"Enabling only {result.enabled[0]}")
    elif args.left_right:
        result = manager.apply_left_right()
        print(f"Enabling only {' and '.join(result.enabled)}")
    else:
        result = manager.apply_saved(disabled=args.monitors)
    _report(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for monitor-config"""
    args = parse_args(argv)

    settings = load_settings(args.config)
    debug = args.debug or settings['debug']
    log = setup_logging(debug=debug, log_file=args.logfile)
    log.debug("monitor-config %s (PID %d), args: %s", __version__, os.getpid(), vars(args))

    store = LayoutStore(args.layout_file or settings['layout_file'])
    kscreen = KScreenDoctor(
        binary=settings['kscreen_doctor'],
        timeout=settings['command_timeout'],
    )
    manager = LayoutManager(store, kscreen, dry_run=args.dry_run)

    try:
        return run(args, manager)

    except ConfigNotSavedError as e:
        log.debug("No saved layout at %s", e.path)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except MonitorConfigError as e:
        log.error(f"❌ {e}")
        log.debug(traceback.format_exc())
        return 1

    except OSError as e:
        log.error(f"❌ OS error: {e}")
        log.debug(traceback.format_exc())
        return 1


if __name__ == '__main__':
    sys.exit(main())
