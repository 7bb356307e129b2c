#!/usr/bin/env python3
"""
Utility script to visualize the network of a saved driver.

Usage:
    python scripts/visualize_network.py --code 9a99...3fbf --config examples/config_corridor.ini
"""

import sys
import argparse
from pathlib import Path

# Add the source directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from evodrive.phenotype import Individual
from evodrive.run.config import Config


def visualize_code(code, config, output_file='network', format='png', view=True):
    """
    Visualize the network decoded from a genome code.

    Args:
        code: Hexadecimal genome code
        config: Config describing the network architecture
        output_file: Output filename (without extension)
        format: Output format (png, pdf, svg, etc.)
        view: Whether to automatically open the generated file
    """
    individual = Individual.from_code(code, config)

    dot = individual.network.visualize(view=False)
    dot.format = format
    dot.render(output_file, view=view, cleanup=True)
    print(f"Network visualization saved to {output_file}.{format}")


def main():
    parser = argparse.ArgumentParser(description='Visualize the network of a saved driver')
    parser.add_argument('--code', type=str, required=True,
                        help='Hexadecimal genome code')
    parser.add_argument('--config', type=str, default=None,
                        help='INI file describing the network architecture')
    parser.add_argument('--output', type=str, default='network',
                        help='Output filename (without extension)')
    parser.add_argument('--format', type=str, default='png',
                        choices=['png', 'pdf', 'svg'],
                        help='Output format')
    parser.add_argument('--no-view', action='store_true',
                        help='Do not automatically open the generated file')

    args = parser.parse_args()

    try:
        visualize_code(args.code, Config(args.config), args.output, args.format, not args.no_view)
    except ValueError as err:
        print(f"Error: {err}")
        sys.exit(1)


if __name__ == '__main__':
    main()
