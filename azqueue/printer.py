import json

import click
import yaml
from tabulate import tabulate


def format_output(data, fmt):
    if fmt == 'json':
        click.echo(json.dumps(data, indent=2))
    elif fmt == 'yaml':
        click.echo(yaml.safe_dump(data, sort_keys=False))
    elif fmt == 'table':
        if isinstance(data, dict):
            rows = [(k, _flatten(v)) for k, v in data.items()]
            click.echo(tabulate(rows, headers=['field', 'value']))
        elif isinstance(data, list) and data and isinstance(data[0], dict):
            click.echo(tabulate(data, headers='keys'))
        else:
            click.echo(str(data))
    else:
        click.echo(data)


def _flatten(value):
    # nested mappings (response headers) get one line per entry
    if isinstance(value, dict):
        return "\n".join(f"{k}: {v}" for k, v in value.items())
    return value
