#!/usr/bin/env python3
"""
Main entrypoint for the foliSDK environment manager
Delegates to the unified CLI in core/cli.py
"""
from folisdk_env.core.cli import cli

if __name__ == '__main__':
    cli()
