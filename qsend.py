import logging
import sys

import click

from azqueue.auth import Authenticator
from azqueue.config import load_config
from azqueue.exceptions import ConfigError, SigningError
from azqueue.message import encode_message
from azqueue.printer import format_output
from azqueue.queue import QueueManager


@click.group(context_settings=dict(help_option_names=['--help']))
@click.option('--profile', required=True, help='Profile name from .config.yaml')
@click.option('--config', 'config_path', default='.config.yaml',
              help='Path to configuration file')
@click.option('--format', 'outfmt', default='json',
              type=click.Choice(['json', 'yaml', 'table']))
@click.option('--verbose', '-v', is_flag=True, help='Log signing details')
@click.pass_context
def cli(ctx, profile, config_path, outfmt, verbose):
    """CLI tool for sending messages to an Azure Storage queue."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )
    try:
        conf = load_config(profile, config_path)
    except ConfigError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    auth = Authenticator(conf)
    ctx.obj = {
        'profile': profile,
        'conf': conf,
        'auth': auth,
        'outfmt': outfmt,
    }


@cli.command('put-message')
@click.argument('text')
@click.option('--raw', is_flag=True, help='Send TEXT without XML escaping')
@click.option('--timeout', type=float, help='Request timeout in seconds')
@click.pass_context
def put_message_cmd(ctx, text, raw, timeout):
    """Sign and send TEXT as a single queue message."""
    qm = QueueManager(ctx.obj['auth'], timeout=timeout)
    try:
        result = qm.put_message(text, escape=not raw)
    except SigningError as e:
        click.echo(f"Couldn't sign request: {e}", err=True)
        sys.exit(1)

    format_output(result.to_dict(), ctx.obj['outfmt'])
    if not result.ok:
        sys.exit(1)


@cli.command('string-to-sign')
@click.argument('text')
@click.option('--raw', is_flag=True, help='Use TEXT without XML escaping')
@click.option('--date', 'timestamp', help='Request date, e.g. "Mon, 02 Jan 2023 03:04:05 GMT"')
@click.pass_context
def string_to_sign_cmd(ctx, text, raw, timestamp):
    """Show what would be signed and sent for TEXT, without sending it."""
    auth = ctx.obj['auth']
    body = encode_message(text, escape=not raw).encode('utf-8')
    try:
        headers, url = auth.sign(len(body), timestamp=timestamp)
    except SigningError as e:
        click.echo(f"Couldn't sign request: {e}", err=True)
        sys.exit(1)

    format_output({
        'url': url,
        'string_to_sign': auth.string_to_sign(len(body), headers['x-ms-date']),
        'headers': headers,
        'body': body.decode('utf-8'),
    }, ctx.obj['outfmt'])


if __name__ == '__main__':
    cli()
