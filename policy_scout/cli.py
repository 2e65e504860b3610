# === FILE: policy_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа PolicyScout через командную строку.

Команды:
  find      Найти политику конфиденциальности сайта и собрать её текст
  refresh   Переобойти список сайтов без кэша (ежемесячное обновление)
  config    Показать текущую конфигурацию
  serve     Запустить HTTP API (POST /analyze)

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --max-pages INT     Лимит страниц на один обход (override max_pages)
  --renderer NAME     browser | http
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Коды выхода команды find:
  0  политика найдена, либо сайт не содержит ссылки на политику
  1  ошибка во время анализа или таймаут
  2  неверный URL

Пример:
  policy-scout --max-pages 5 find https://example.com --json out/example.json --pretty
"""
import asyncio
import sys
from pathlib import Path

import click

from policy_scout import __version__
from policy_scout.aggregator import SOURCE_EMPTY, SOURCE_NOT_FOUND
from policy_scout.config import load_config
from policy_scout.engine import analyze_site, refresh_sites
from policy_scout.logger import DEFAULT_FORMAT, init_logging
from policy_scout.report.json_report import render_json
from policy_scout.utils import read_site_list, validate_site_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _site_url(ctx, param, value):
    if value is None:
        return None
    try:
        return validate_site_url(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PolicyScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--max-pages', '-l', 'max_pages',
    type=click.IntRange(min=1),
    default=None,
    help='Лимит страниц на один обход (override max_pages)'
)
@click.option(
    '--renderer', 'renderer',
    type=click.Choice(['browser', 'http']),
    default=None,
    help='Способ загрузки страниц (override renderer)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, max_pages, renderer, log_level, log_file, log_format):
    """Группа команд PolicyScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    overrides = {}
    if max_pages is not None:
        overrides['max_pages'] = max_pages
    if renderer is not None:
        overrides['renderer'] = renderer
    if overrides:
        cfg = cfg.model_copy(update=overrides)
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('find', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False, callback=_site_url)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--dedup', is_flag=True, help='Отбрасывать страницы с уже виденным текстом')
@click.option('--no-cache', 'no_cache', is_flag=True, help='Не использовать сохранённый текст')
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут всего анализа (секунд)'
)
@click.pass_context
def find(ctx, url, json_output, pretty, dedup, no_cache, timeout):
    """Найти политику сайта URL и собрать её полный текст."""
    cfg = ctx.obj['config']
    if url is None:
        url = _site_url(ctx, None, click.prompt('Enter website URL'))
    if dedup:
        cfg = cfg.model_copy(update={'dedup_content': True})

    click.echo(f'Analyzing {url} (max {cfg.max_pages} pages)', err=True)
    job = analyze_site(cfg, url, use_cache=not no_cache)
    try:
        if timeout:
            report = asyncio.run(asyncio.wait_for(job, timeout=timeout))
        else:
            report = asyncio.run(job)
    except asyncio.TimeoutError:
        print_error(f'Анализ не завершён за {timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при анализе: {e}')

    if report.source == SOURCE_NOT_FOUND:
        click.echo(f'No privacy policy URL found for {url}.')
    elif report.source == SOURCE_EMPTY:
        click.echo(f'Policy found at {report.policy_url}, but it contained no extractable text.')

    if json_output:
        try:
            saved = render_json(report, json_output, pretty=pretty)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        click.echo(f'JSON report: {saved}')
    elif report.found:
        click.echo(report.json(pretty=pretty))


@cli.command('refresh', context_settings=CONTEXT_SETTINGS)
@click.argument('sites_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить сводный JSON-отчёт в файл'
)
@click.pass_context
def refresh(ctx, sites_file, json_output):
    """Переобойти все сайты из SITES_FILE (по одному URL в строке), минуя кэш."""
    cfg = ctx.obj['config']
    sites = read_site_list(sites_file)
    try:
        reports = asyncio.run(refresh_sites(cfg, sites))
    except Exception as e:
        print_error(f'Ошибка при обновлении: {e}')

    for r in reports:
        click.echo(f'{r.source:<10} {r.site_url} {r.policy_url or ""}'.rstrip())
    if json_output:
        click.echo(f'JSON report: {render_json(reports, json_output)}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON (ключ API скрыт)."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2, exclude={'search_api_key'}))


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default=None, help='Адрес (override server_host)')
@click.option('--port', type=int, default=None, help='Порт (override server_port)')
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP API: POST /analyze {"url": "..."}."""
    from policy_scout.server import run_server

    run_server(ctx.obj['config'], host=host, port=port)


if __name__ == "__main__":
    cli()
