"""CLI commands for bytering."""

from pathlib import Path

import click


@click.group()
@click.version_option()
def main() -> None:
    """Find byte sequences in files and streams with a fixed-size ring."""
    pass


def _load_config(config_path: Path | None):
    from bytering.config import Config

    try:
        return Config.load(config_path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _match_preview(f, start: int, end: int, context: int) -> str:
    """Render the match with up to `context` bytes either side, match in brackets."""
    from bytering.formatting import format_bytes_preview

    before_start = max(0, start - context)
    f.seek(before_start)
    before = f.read(start - before_start)
    body = f.read(end - start)
    after = f.read(context)
    return (
        format_bytes_preview(before, limit=context)
        + "["
        + format_bytes_preview(body, limit=end - start)
        + "]"
        + format_bytes_preview(after, limit=context)
    )


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("pattern")
@click.option("--hex", "hex_input", is_flag=True, help="PATTERN is hex digits, e.g. 'de ad be ef'")
@click.option("--encoding", "-e", default="utf-8", show_default=True, help="Encoding of PATTERN")
@click.option("--first", is_flag=True, help="Stop at the first match")
@click.option(
    "--max",
    "max_matches",
    type=click.IntRange(min=0),
    default=None,
    help="Stop after N matches (0 = unlimited)",
)
@click.option(
    "--context", "-C", type=click.IntRange(min=0), default=None, help="Bytes shown around a match"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of the default",
)
@click.option("--log/--no-log", "log_enabled", default=False, help="Write a JSON scan log")
def scan(
    path: Path,
    pattern: str,
    hex_input: bool,
    encoding: str,
    first: bool,
    max_matches: int | None,
    context: int | None,
    config_path: Path | None,
    log_enabled: bool,
) -> None:
    """Report every offset where PATTERN occurs in PATH.

    Exits with status 1 when the pattern is not found.
    """
    from contextlib import closing

    from bytering import logging as blog
    from bytering.formatting import format_offset, parse_pattern
    from bytering.scanner import iter_matches

    cfg = _load_config(config_path)

    try:
        needle = parse_pattern(pattern, hex_input=hex_input, encoding=encoding)
    except (ValueError, LookupError) as e:
        raise click.BadParameter(str(e), param_hint="PATTERN") from e

    if log_enabled:
        blog.configure(cfg)
    else:
        blog.configure_quiet()

    if first:
        limit = 1
    elif max_matches is not None:
        limit = max_matches
    else:
        limit = cfg.scan.max_matches
    if context is None:
        context = cfg.scan.context_bytes

    blog.scan_started(str(path), len(needle))

    count = 0
    with (
        open(path, "rb") as f,
        open(path, "rb") as peek,
        closing(iter_matches(f, needle, read_size=cfg.scan.read_size)) as matches,
    ):
        for match in matches:
            count += 1
            preview = _match_preview(peek, match.start, match.end, context)
            click.echo(f"{format_offset(match.start)}  {preview}")
            if limit and count >= limit:
                break

    if count == 0:
        blog.no_match(str(path))
        raise SystemExit(1)

    blog.scan_complete(count, str(path))


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("capacity", type=click.IntRange(min=1))
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=0),
    default=256,
    show_default=True,
    help="Max window bytes to print",
)
def window(path: Path, capacity: int, limit: int) -> None:
    """Show the last CAPACITY bytes of PATH as held by a ring."""
    from bytering.formatting import format_bytes_preview
    from bytering.ring import ByteRing

    read_size = _load_config(None).scan.read_size
    ring = ByteRing(capacity)
    with open(path, "rb") as f:
        while True:
            chunk = f.read(read_size)
            if not chunk:
                break
            for b in chunk:
                ring.push(b)

    click.echo(f"Capacity: {ring.capacity}")
    click.echo(f"Retained: {len(ring)}")
    click.echo(f"State: {ring.state.value}")
    click.echo(f"Window: {format_bytes_preview(ring.materialize(), limit=limit)}")


@main.group()
def config() -> None:
    """Manage configuration."""
    pass


@config.command("show")
def config_show() -> None:
    """Display current configuration."""
    from bytering.config import Config

    cfg = Config.load()

    click.echo(f"Config file: {cfg.config_path}")
    click.echo(f"Exists: {cfg.config_path.exists()}")
    click.echo()
    click.echo("[scan]")
    click.echo(f"  read_size = {cfg.scan.read_size}")
    click.echo(f"  max_matches = {cfg.scan.max_matches}")
    click.echo(f"  context_bytes = {cfg.scan.context_bytes}")
    click.echo()
    click.echo("[system]")
    click.echo(f"  log_max_bytes = {cfg.system.log_max_bytes}")
    click.echo(f"  log_backup_count = {cfg.system.log_backup_count}")


@config.command("edit")
def config_edit() -> None:
    """Open config file in editor."""
    import os
    import subprocess

    from bytering import logging as blog
    from bytering.config import Config

    cfg = Config.load()

    # Create config if it doesn't exist
    if not cfg.config_path.exists():
        cfg.save()
        blog.config_created(str(cfg.config_path))

    editor = os.environ.get("EDITOR", "nano")
    subprocess.run([editor, str(cfg.config_path)])


@config.command("reset")
@click.confirmation_option(prompt="Reset config to defaults?")
def config_reset() -> None:
    """Reset configuration to defaults."""
    from bytering import logging as blog
    from bytering.config import Config

    cfg = Config()
    cfg.save()
    blog.config_reset(str(cfg.config_path))


if __name__ == "__main__":
    main()
