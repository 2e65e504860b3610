# cli.py

"""
Точка входа для запуска PolicyScout из корня репозитория без установки.

Пример запуска:
    python cli.py find https://example.com --pretty
    python cli.py --config configs/default.yaml refresh configs/top_sites.txt
"""
from policy_scout.cli import cli


if __name__ == '__main__':
    cli(prog_name='policy-scout')
