#!/usr/bin/env python3
"""
Subdomain Delegator - Main Entry Point

This is the main entry point for the Subdomain Delegator.
It can be run directly or imported as a module.
"""

from subdomain_delegator.cli.main import main

if __name__ == "__main__":
    main()
