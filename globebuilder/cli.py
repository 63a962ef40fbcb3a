"""Click CLI commands for GlobeBuilder."""

import logging
import pathlib

import click

from .builder import GlobeBuilder, normalize_asset_name
from .config import GlobeConfig
from .constants import OUTPUT_DIR
from .errors import GlobeBuilderError
from . import export
from .sphere import build_globe_mesh

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """GlobeBuilder CLI for generating globe meshes and basemap textures."""
    pass


def _read_assets(asset_dir: pathlib.Path, names) -> dict:
    """Load the named assets from disk into memory."""
    assets = {}
    for name in names:
        key = normalize_asset_name(name)
        path = asset_dir / key
        if not path.exists():
            raise FileNotFoundError(f"Asset not found: {path}")
        assets[key] = path.read_bytes()
    return assets


@cli.command()
@click.argument('asset_dir', type=click.Path(exists=True, file_okay=False, path_type=pathlib.Path))
@click.option('--output', '-o', default=str(OUTPUT_DIR), help='Output directory')
@click.option('--slices', type=int, default=None, help='Longitude subdivisions')
@click.option('--stacks', type=int, default=None, help='Latitude subdivisions')
@click.option('--radius', type=float, default=None, help='Globe radius')
@click.option('--basemap', default=None, help='Basemap asset name')
@click.option('--features', default=None, help='GeoJSON asset name')
@click.option('--padding', type=(int, int), default=None, help='Basemap padding W H')
@click.option('--seed', type=int, default=None, help='Seed for basemap fill colors')
@click.option('--format', 'fmt', type=click.Choice(['glb', 'bin']), default='glb',
              help='Mesh output format')
def build(asset_dir, output, slices, stacks, radius, basemap, features,
          padding, seed, fmt):
    """Build globe mesh, feature mesh and basemap from ASSET_DIR."""
    try:
        config = GlobeConfig.from_env(
            slices=slices, stacks=stacks, globe_radius=radius,
            basemap=basemap, features=features,
            basemap_padding=padding, color_seed=seed,
        )
        builder = GlobeBuilder(config)
        assets = _read_assets(asset_dir, [config.basemap, config.features])
        result = builder.build(assets)

        out_dir = pathlib.Path(output)
        if fmt == 'glb':
            written = [export.write_scene(result.globe, result.features,
                                          out_dir / 'globe.glb')]
        else:
            written = [str(p) for p in export.write_buffers(result.globe, out_dir, 'globe')]
            written += [str(p) for p in export.write_buffers(result.features, out_dir, 'features')]
        written.append(export.write_basemap(result.basemap, out_dir / 'basemap.png'))

        click.echo(f"Globe:    {result.globe.vertex_count} vertices, "
                   f"{result.globe.triangle_count} triangles")
        click.echo(f"Features: {result.features.vertex_count} vertices, "
                   f"{result.features.triangle_count} triangles")
        click.echo(f"Basemap:  {result.basemap.width}x{result.basemap.height}")
        for path in written:
            click.echo(f"  -> {path}")
    except (GlobeBuilderError, FileNotFoundError, ValueError) as e:
        logger.error(f"Error building globe: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.option('--slices', type=int, default=None, help='Longitude subdivisions')
@click.option('--stacks', type=int, default=None, help='Latitude subdivisions')
@click.option('--radius', type=float, default=None, help='Globe radius')
@click.option('--output', '-o', default=str(OUTPUT_DIR), help='Output directory')
def sphere(slices, stacks, radius, output):
    """Write only the globe mesh as raw vertex/index buffers."""
    try:
        config = GlobeConfig.from_env(slices=slices, stacks=stacks, globe_radius=radius)
        config.validate()
        mesh = build_globe_mesh(config.slices, config.stacks, config.globe_radius)
        for path in export.write_buffers(mesh, output, 'globe'):
            click.echo(f"  -> {path}")
    except ValueError as e:
        logger.error(f"Error building sphere: {e}")
        raise click.ClickException(str(e))


if __name__ == '__main__':
    cli()
