# policy_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта PolicyScout.

Сериализация одного или нескольких PolicyReport в файл.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence, Union

from policy_scout.aggregator import PolicyReport


def render_json(
    report: Union[PolicyReport, Sequence[PolicyReport]],
    output_path: Path | str,
    *,
    pretty: bool = True,
) -> Path:
    """
    Сохраняет отчёт (или список отчётов) в формате JSON по указанному пути.

    :param report: PolicyReport или список PolicyReport
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from policy_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/example_com.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(report, PolicyReport):
        data = report.to_dict()
    else:
        data = [r.to_dict() for r in report]

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
