"""
Command-line interface implementation
"""

import click
import json

from gridiron_overlay.config import Settings, get_settings
from gridiron_overlay.geometry import calculate_canvas_dimensions
from gridiron_overlay.ingestion import load_play
from gridiron_overlay.overlays import extract_play_info, FILTER_PRESETS, get_preset
from gridiron_overlay.pipeline import PlaybackSession
from gridiron_overlay.utils import setup_logging, pretty_json


@click.group()
@click.option('--log-level', default='WARNING', help='Logging level')
@click.option('--config', 'config_path', default=None, type=click.Path(exists=True),
              help='Settings JSON file')
@click.pass_context
def cli(ctx, log_level, config_path):
    """Football play overlay engine CLI"""
    setup_logging(level=log_level)

    ctx.ensure_object(dict)
    if config_path:
        try:
            ctx.obj['settings'] = Settings.from_file(config_path)
        except (OSError, ValueError, TypeError) as e:
            raise click.ClickException(f"Invalid settings file {config_path}: {e}")
    else:
        ctx.obj['settings'] = get_settings()


def _load(ctx, play_path):
    try:
        return load_play(play_path, ctx.obj['settings'])
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not read play {play_path}: {e}")


@cli.command()
@click.argument('play_path', type=click.Path(exists=True))
@click.pass_context
def validate(ctx, play_path):
    """Run ingestion and show kept callouts and rejections"""
    play = _load(ctx, play_path)
    info = extract_play_info(play)

    click.echo("=== Play ===")
    click.echo(f"Title: {info['title']}")
    click.echo(f"Duration: {info['duration']:.2f}s")
    click.echo(f"Frames: {info['frame_count']}")
    click.echo(f"Players: {info['player_count']}")

    click.echo(f"\n=== Callouts ({len(play.callouts)}) ===")
    for callout in play.callouts:
        click.echo(f"  {callout.id}: {callout.start_time:.2f}-{callout.end_time:.2f}s  {callout.text}")

    click.echo(f"\n=== Rejections ({len(play.rejections)}) ===")
    for rejection in play.rejections:
        click.echo(f"  {rejection.callout_id or '?'}: {rejection.reason.value} {rejection.message}")


@cli.command()
@click.argument('play_path', type=click.Path(exists=True))
@click.option('--time', 'current_time', required=True, type=float, help='Playback time in seconds')
@click.option('--width', default=1280.0, help='Container width in pixels')
@click.option('--height', default=720.0, help='Container height in pixels')
@click.option('--video-width', default=None, type=float, help='Intrinsic video width')
@click.option('--video-height', default=None, type=float, help='Intrinsic video height')
@click.option('--learn-mode', is_flag=True, help='Let terminology through the broadcast filter')
@click.option('--broadcast', is_flag=True, help='Apply broadcast density caps')
@click.option('--preset', default=None, type=click.Choice(sorted(FILTER_PRESETS)),
              help='Viewer filter preset')
@click.pass_context
def frame(ctx, play_path, current_time, width, height, video_width, video_height, learn_mode, broadcast,
          preset):
    """Print one tick's overlay decision as JSON"""
    play = _load(ctx, play_path)
    dimensions = calculate_canvas_dimensions(
        width, height,
        video_width or play.video_width,
        video_height or play.video_height
    )

    session = PlaybackSession(play, ctx.obj['settings'])
    filters = get_preset(preset) if preset else None
    decision = session.tick(current_time, dimensions, learn_mode=learn_mode, broadcast=broadcast,
                            filters=filters)

    output = decision.to_dict()
    output['dimensions'] = {
        'width': dimensions.width,
        'height': dimensions.height,
        'offset_x': dimensions.offset_x,
        'offset_y': dimensions.offset_y,
        'scale': dimensions.scale
    }
    click.echo(pretty_json(output))


@cli.command()
@click.argument('play_path', type=click.Path(exists=True))
@click.option('--step', default=0.5, type=click.FloatRange(min=0.01), help='Sweep step in seconds')
@click.option('--width', default=1280.0, help='Container width in pixels')
@click.option('--height', default=720.0, help='Container height in pixels')
@click.option('--json', 'as_json', is_flag=True, help='Print rows as JSON')
@click.pass_context
def timeline(ctx, play_path, step, width, height, as_json):
    """Sweep the play and print per-step overlay counts"""
    play = _load(ctx, play_path)
    dimensions = calculate_canvas_dimensions(width, height, play.video_width, play.video_height)
    session = PlaybackSession(play, ctx.obj['settings'])

    end_time = play.video_duration
    if play.frames:
        end_time = max(end_time, play.frames[-1].timestamp)

    rows = []
    index = 0
    while index * step <= end_time + 1e-9:
        current_time = round(index * step, 6)
        decision = session.tick(current_time, dimensions)
        frame_data = decision.frame
        rows.append({
            'time': current_time,
            'players': len(frame_data.players) if frame_data else 0,
            'arrows': len(frame_data.arrows) if frame_data else 0,
            'terminology': len(frame_data.terminology) if frame_data else 0,
            'terms': [t.term for t in decision.terms],
            'callouts': [c.id for c in decision.callouts]
        })
        index += 1

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    click.echo(f"{'time':>7} {'players':>7} {'arrows':>6} {'terms':>5}  selected / callouts")
    for row in rows:
        click.echo(f"{row['time']:>7.2f} {row['players']:>7} {row['arrows']:>6} {row['terminology']:>5}  "
                   f"{', '.join(row['terms']) or '-'} / {', '.join(row['callouts']) or '-'}")

    stats = session.get_stats()
    click.echo(f"\nTicks: {stats['ticks']} (empty: {stats['empty_ticks']})")


if __name__ == '__main__':
    cli()
