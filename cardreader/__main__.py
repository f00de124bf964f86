"""
cardreader/__main__.py: Entry point for running CLI as module
Allows: python -m cardreader <command>
"""

from cardreader.cli.main import cli

if __name__ == '__main__':
    cli()
