#!/usr/bin/env python3
"""
monitor-config entry point for running as a module: python3 -m monitor_config
"""

import sys
from monitor_config.cli import main

if __name__ == '__main__':
    sys.exit(main())
