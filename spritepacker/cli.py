"""
spritepacker CLI - Command-line interface for packing sprites into sheets
"""

import click
import json
import logging
import sys
from spritepacker import SpritePacker
from spritepacker.exceptions import InternalInvariantError, OversizedRectangleError, ParseError
from spritepacker.formats import parse_sizes


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def _make_packer(sheet_size, sheet_width, sheet_height) -> SpritePacker:
    width = sheet_width if sheet_width is not None else sheet_size
    height = sheet_height if sheet_height is not None else sheet_size
    return SpritePacker(sheet_width=width, sheet_height=height)


def sheet_size_options(f):
    """Add --sheet-size/--sheet-width/--sheet-height to a command"""
    f = click.option('--sheet-height', type=click.IntRange(min=1), default=None,
                     help='Sheet height in pixels (overrides --sheet-size)')(f)
    f = click.option('--sheet-width', type=click.IntRange(min=1), default=None,
                     help='Sheet width in pixels (overrides --sheet-size)')(f)
    f = click.option('--sheet-size', type=click.IntRange(min=1), default=None,
                     help='Square sheet size in pixels (default: 1024)')(f)
    return f


@click.group()
@click.version_option()
def cli():
    """
    spritepacker - Pack images into the fewest fixed-size sprite sheets.

    Examples:
        spritepacker pack 864x480 78x107 410x321
        spritepacker atlas sprites/*.png -o build/atlas
    """
    pass


@cli.command()
@click.argument('sizes', nargs=-1)
@click.option('-i', '--input', 'input_file', type=click.File('r'), default=None,
              help='Read WxH sizes from a file (use - for stdin)')
@click.option('-o', '--output', default=None, help='Output file path (.txt, .json)')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text',
              help='Format printed when no --output is given')
@sheet_size_options
@click.option('--verbose', '-v', is_flag=True, help='Show per-sheet statistics')
def pack(sizes, input_file, output, output_format, sheet_size, sheet_width, sheet_height, verbose):
    """
    Pack WxH sizes into sheets.

    Sizes come from the arguments, from --input, or from stdin. A listing may
    start with the number of sizes that follow, e.g. "3 64x64 32x32 16x16".

    Examples:
        spritepacker pack 864x480 78x107 410x321
        spritepacker pack -i sizes.txt -o sheets.json --sheet-size 2048
        echo "700x700 700x700" | spritepacker pack
    """
    _setup_logging(verbose)
    try:
        if sizes:
            text = " ".join(sizes)
        elif input_file is not None:
            text = input_file.read()
        else:
            text = click.get_text_stream('stdin').read()

        rects = parse_sizes(text)
        packer = _make_packer(sheet_size, sheet_width, sheet_height)
        result = packer.pack(rects)

        if output:
            result.save(output)
            click.secho(f"✓ Success! Packed {len(rects)} sprites into {len(result)} sheets, saved to {output}", fg='green')
        elif output_format == 'json':
            click.echo(json.dumps(result.to_json(), indent=2))
        else:
            click.echo(result.to_text(), nl=False)

        # Stats go to stderr so stdout stays parseable
        if verbose:
            stats = result.stats()
            click.echo("\nPacking Statistics:", err=True)
            click.echo(f"  Sheet size: {stats['sheet_size'][0]}x{stats['sheet_size'][1]}", err=True)
            click.echo(f"  Sprites: {stats['sprites']}", err=True)
            click.echo(f"  Sheets: {stats['sheets']}", err=True)
            for i, used in enumerate(stats['utilization'], start=1):
                click.echo(f"  Sheet {i}: {used:.1%} used", err=True)

    except ParseError as e:
        click.secho(f"Parse Error: {e}", fg='red', err=True)
        sys.exit(1)
    except OversizedRectangleError as e:
        click.secho(f"Oversized Error: {e}", fg='red', err=True)
        sys.exit(1)
    except InternalInvariantError as e:
        click.secho(f"Internal Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg='red', err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


@cli.command()
@click.argument('images', nargs=-1, required=True)
@click.option('-o', '--output', 'output_dir', required=True, help='Output directory for sheet PNGs and manifest.json')
@click.option('--prefix', default='sheet', help='Sheet file name prefix (default: sheet)')
@sheet_size_options
@click.option('--verbose', '-v', is_flag=True, help='Show detailed packing info')
def atlas(images, output_dir, prefix, sheet_size, sheet_width, sheet_height, verbose):
    """
    Render image files into sprite sheet PNGs.

    Writes PREFIX_1.png, PREFIX_2.png, ... and manifest.json to the output
    directory.

    Examples:
        spritepacker atlas sprites/*.png -o build/atlas
        spritepacker atlas a.png b.png -o out --sheet-size 512 --prefix tiles
    """
    _setup_logging(verbose)
    try:
        packer = _make_packer(sheet_size, sheet_width, sheet_height)
        if verbose:
            click.echo(f"Packing {len(images)} images into {packer.sheet_width}x{packer.sheet_height} sheets")

        manifest = packer.build_atlas(images, output_dir, prefix=prefix)

        if verbose:
            for sheet in manifest.sheets:
                click.echo(f"  {sheet.image}: {len(sheet.sprites)} sprites")

        click.secho(f"✓ Success! Wrote {len(manifest.sheets)} sheets to {output_dir}", fg='green')

    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except OversizedRectangleError as e:
        click.secho(f"Oversized Error: {e}", fg='red', err=True)
        sys.exit(1)
    except InternalInvariantError as e:
        click.secho(f"Internal Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg='red', err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
