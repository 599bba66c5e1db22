#!/usr/bin/env python3
"""
ATIS Encoder CLI - Generate ATIS test bursts.
"""

import sys
from pathlib import Path

import click

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from atis import ATISEncoder


@click.command()
@click.argument("identifier", type=str)
@click.option(
    "-o", "--output",
    type=click.Path(),
    default="atis_burst.wav",
    help="Output WAV file path",
)
@click.option(
    "--raw",
    is_flag=True,
    help="Write raw signed 16-bit PCM to stdout instead of a file",
)
@click.option(
    "-a", "--amplitude",
    type=float,
    default=0.7,
    help="Amplitude 0.0-1.0 (default: 0.7)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
def main(identifier: str, output: str, raw: bool, amplitude: float, verbose: bool):
    """
    Generate an ATIS burst for a 9 or 10 digit IDENTIFIER.

    Examples:

        atis-encode 123456789 -o burst.wav

        atis-encode 9211234567 --raw | atis-decode 127.0.0.1 5005
    """
    encoder = ATISEncoder()

    try:
        encoder.identifier_pairs(identifier)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if verbose:
        click.echo(f"Generating ATIS burst for {identifier}...", err=True)
        click.echo(f"  Symbols: {encoder.burst_symbols(identifier)}", err=True)
        click.echo(f"  Amplitude: {amplitude}", err=True)

    if raw:
        samples = encoder.generate_pcm16(identifier, amplitude=amplitude)
        stdout = click.get_binary_stream("stdout")
        stdout.write(samples.astype("<i2").tobytes())
        stdout.flush()
        return

    try:
        encoder.generate_to_file(output, identifier, amplitude=amplitude)
        click.echo(f"✓ Generated {output}")
    except Exception as e:
        click.echo(f"Error generating file: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
