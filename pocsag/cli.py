"""
POCSAG Encoder CLI - Turn pager messages into transmitter audio.
"""

import logging
import sys

import click

from . import MAX_DELAY, MIN_DELAY
from .encoder import PocsagEncoder
from .page import read_pages


_logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "-i", "--input", "input_file",
    type=click.File("r", encoding="latin-1"),
    default="-",
    help="Read messages from file (default: stdin)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, allow_dash=True),
    default="-",
    help="Output file; '-' writes raw PCM to stdout (default: -)",
)
@click.option(
    "--min-delay",
    type=float,
    default=float(MIN_DELAY),
    help=f"Shortest silence after a message in seconds (default: {MIN_DELAY})",
)
@click.option(
    "--max-delay",
    type=float,
    default=float(MAX_DELAY),
    help=f"Longest silence after a message in seconds (default: {MAX_DELAY})",
)
@click.option(
    "--no-silence",
    is_flag=True,
    help="Do not insert silence between messages",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for silence lengths (default: random)",
)
@click.option(
    "--skip-invalid",
    is_flag=True,
    help="Skip malformed lines instead of stopping",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output with detailed logging",
)
def main(
    input_file,
    output: str,
    min_delay: float,
    max_delay: float,
    no_silence: bool,
    seed: int | None,
    skip_invalid: bool,
    verbose: bool,
):
    """
    Encode pager messages as POCSAG audio.

    Each input line is ADDRESS:MESSAGE or ADDRESS:FUNCTION:MESSAGE.
    Output is 16-bit signed little-endian mono PCM at 22050 Hz.

    Examples:

        echo "1234567:Hello" | pocsag-encode > page.raw

        pocsag-encode -i pages.txt -o pages.wav --seed 1

        pocsag-encode -i pages.txt --no-silence --skip-invalid -o pages.pcm
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        )

    try:
        encoder = PocsagEncoder(min_delay=min_delay, max_delay=max_delay, seed=seed)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    pages = (page for _, page in read_pages(input_file, skip_invalid=skip_invalid))

    try:
        if output == "-":
            stdout = sys.stdout.buffer
            for block in encoder.stream(pages, silence=not no_silence):
                stdout.write(encoder.synthesizer.to_bytes(block))
                stdout.flush()
        else:
            encoder.generate_to_file(output, pages, silence=not no_silence)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _logger.info(f"Done, {encoder.sample_rate} Hz output written to {output}")


if __name__ == "__main__":
    main()
