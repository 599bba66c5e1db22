#!/usr/bin/env python3
"""
ATIS Decoder CLI - Decode vessel identifiers and forward them over UDP.
"""

import logging
import sys
from pathlib import Path

import click

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from atis import ATISDecoder, ConsoleSink, UDPSink
from atis.audio import list_input_devices, read_audio_file, read_device, read_raw_stream


def _list_devices(ctx: click.Context, param: click.Parameter, value: bool):
    if not value or ctx.resilient_parsing:
        return

    click.echo("Audio Input Devices:")
    click.echo("-" * 60)
    for index, name in list_input_devices():
        click.echo(f"  [{index}] {name}")
    ctx.exit()


@click.command()
@click.argument("host")
@click.argument("port", type=click.IntRange(0, 65535))
@click.option(
    "-i", "--input",
    type=click.Path(exists=True, dir_okay=False),
    help="Decode from file instead of raw PCM on stdin",
)
@click.option(
    "-d", "--device",
    type=int,
    help="Decode from live audio input device number",
)
@click.option(
    "-l", "--list-devices",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_list_devices,
    help="List available audio input devices",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output with detailed logging",
)
def main(host: str, port: int, input: str | None, device: int | None, verbose: bool):
    """
    Decode ATIS identifiers and send each one to HOST:PORT over UDP.

    Reads raw signed 16-bit mono PCM at 24000 Hz from stdin unless a file or
    device is given.

    Examples:

        rtl_fm -f 156.500M -M fm -s 24000 | atis-decode 127.0.0.1 5005

        atis-decode 127.0.0.1 5005 -i burst.wav

        atis-decode 127.0.0.1 5005 -d 2
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console = ConsoleSink()
    udp = UDPSink(host, port)

    def emit(identifier: str):
        console.emit(identifier)
        udp.emit(identifier)

    decoder = ATISDecoder(callback=emit)

    if input:
        source = read_audio_file(input)
        click.echo(f"Decoding from file: {input}", err=True)
    elif device is not None:
        source = read_device(device)
        click.echo(f"Decoding from device {device}, press Ctrl+C to stop.", err=True)
    else:
        source = read_raw_stream(click.get_binary_stream("stdin"))

    try:
        count = decoder.run(source)
    except KeyboardInterrupt:
        click.echo("\nStopped.", err=True)
        return
    except (ValueError, RuntimeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if verbose:
            click.echo(f"Stats: {decoder.get_statistics()}", err=True)

    if input and count == 0:
        click.echo("No ATIS bursts detected.", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
