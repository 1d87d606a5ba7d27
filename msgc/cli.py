from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .collapse import collapse
from .config import CONFIG_FILE, EngineConfig, find_config, load_config
from .engine import render
from .errors import MsgcUserError
from .report import check_template, dumps, styles_report
from .styles.capability import Capability, detect_capability
from .styles.registry import StyleRegistry
from .types import CollapseOptions, RenderOptions
from .values import Context
from .version import tool_version

DEBUG_ENV = "MSGC_DEBUG"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="msgc",
        description="Message composer: templates, styled spans, list collapsing",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="отладочный вывод в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в текст")
    sp_render.add_argument("template", help="текст шаблона, @file для чтения из файла или - для stdin")
    sp_render.add_argument(
        "--context",
        metavar="FILE",
        help="YAML или JSON файл со значениями контекста",
    )
    sp_render.add_argument(
        "--set",
        dest="values",
        action="append",
        metavar="NAME=VALUE",
        help="значение контекста (можно указать несколько; повтор имени собирает список)",
    )
    sp_render.add_argument(
        "--capability",
        choices=["none", "ascii", "markup", "auto"],
        help="возможности вывода для стилей (по умолчанию из конфига или none)",
    )
    sp_render.add_argument("--config", metavar="FILE", help=f"файл конфигурации (по умолчанию ./{CONFIG_FILE}, если есть)")
    sp_render.add_argument("--strict-styles", action="store_true", help="ошибка для неизвестных стилей")

    sp_check = sub.add_parser("check", help="Разобрать шаблон и вывести JSON-отчёт")
    sp_check.add_argument("template", help="текст шаблона, @file или -")

    sp_collapse = sub.add_parser("collapse", help="Свернуть элементы в читаемый список")
    sp_collapse.add_argument("items", nargs="*", help="элементы списка")
    sp_collapse.add_argument("--sep", dest="separator", help="разделитель элементов (по умолчанию ', ')")
    sp_collapse.add_argument("--last-sep", dest="last_separator", help="разделитель перед последним (по умолчанию ' and ')")
    sp_collapse.add_argument("--oxford", action="store_true", help="оксфордская запятая")
    sp_collapse.add_argument("--max-items", type=int, help="сколько элементов показывать до сводки 'N more'")
    sp_collapse.add_argument("--sort", action="store_true", help="отсортировать элементы")

    sp_styles = sub.add_parser("styles", help="Список стилей (JSON)")
    sp_styles.add_argument("--capability", choices=["none", "ascii", "markup"], default="ascii")
    sp_styles.add_argument("--config", metavar="FILE", help="файл конфигурации с пользовательскими стилями")

    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get(DEBUG_ENV) else logging.WARNING
    root = logging.getLogger("msgc")
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        root.addHandler(h)


def _read_template(arg: str) -> str:
    """
    Читает шаблон из аргумента.

    Поддерживает три формата:
    - Прямая строка
    - Из файла: @path/to/file.txt (завершающий перевод строки отбрасывается)
    - Из stdin: -
    """
    if arg == "-":
        return sys.stdin.read().rstrip("\n")
    if arg.startswith("@"):
        file_path = Path(arg[1:])
        if not file_path.is_file():
            raise ValueError(f"Template file not found: {file_path}")
        return file_path.read_text(encoding="utf-8").rstrip("\n")
    return arg


def _load_context_file(path_str: str) -> Dict[str, Any]:
    path = Path(path_str)
    if not path.is_file():
        raise ValueError(f"Context file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        from ruamel.yaml import YAML
        from ruamel.yaml.error import YAMLError
        try:
            data = YAML(typ="safe").load(text) or {}
        except YAMLError as e:
            raise ValueError(f"Invalid YAML in context file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Context file must contain a mapping: {path}")
    return data


def _parse_values(values: Optional[List[str]]) -> Dict[str, Any]:
    """Парсит список 'name=value'; повторяющиеся имена собираются в список."""
    result: Dict[str, Any] = {}
    for spec in values or []:
        if "=" not in spec:
            raise ValueError(f"Invalid value format '{spec}'. Expected 'name=value'")
        name, value = spec.split("=", 1)
        name = name.strip()
        if name in result:
            prev = result[name]
            result[name] = (prev if isinstance(prev, list) else [prev]) + [value]
        else:
            result[name] = value
    return result


def _engine_config(config_arg: Optional[str]) -> EngineConfig:
    if config_arg:
        return load_config(Path(config_arg))
    found = find_config(Path.cwd())
    return load_config(found) if found else EngineConfig()


def _cmd_render(ns: argparse.Namespace) -> int:
    config = _engine_config(ns.config)
    registry = StyleRegistry()
    config.apply(registry)

    options: RenderOptions = config.options
    if ns.capability == "auto":
        options = options.replace(capability=detect_capability(sys.stdout))
    elif ns.capability:
        options = options.replace(capability=Capability.parse(ns.capability))
    if ns.strict_styles:
        options = options.replace(strict_styles=True)

    context: Dict[str, Any] = {}
    if ns.context:
        context.update(_load_context_file(ns.context))
    context.update(_parse_values(ns.values))
    try:
        ctx = Context(context)
    except TypeError as e:
        raise ValueError(f"Invalid context value: {e}") from e

    fragment = render(_read_template(ns.template), ctx, options, registry=registry)
    sys.stdout.write(fragment.text)
    if not fragment.text.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def _cmd_check(ns: argparse.Namespace) -> int:
    report = check_template(_read_template(ns.template))
    sys.stdout.write(dumps(report))
    return 0 if report.ok else 2


def _cmd_collapse(ns: argparse.Namespace) -> int:
    overrides: Dict[str, Any] = {}
    if ns.separator is not None:
        overrides["separator"] = ns.separator
    if ns.last_separator is not None:
        overrides["last_separator"] = ns.last_separator
    if ns.oxford:
        overrides["oxford_comma"] = True
    if ns.max_items is not None:
        overrides["max_items"] = ns.max_items
    if ns.sort:
        overrides["sort"] = True
    sys.stdout.write(collapse(ns.items, CollapseOptions(**overrides)) + "\n")
    return 0


def _cmd_styles(ns: argparse.Namespace) -> int:
    registry = StyleRegistry()
    if ns.config:
        load_config(Path(ns.config)).apply(registry)
    sys.stdout.write(dumps(styles_report(registry, Capability.parse(ns.capability))))
    return 0


_COMMANDS = {
    "render": _cmd_render,
    "check": _cmd_check,
    "collapse": _cmd_collapse,
    "styles": _cmd_styles,
}


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.verbose))

    try:
        return _COMMANDS[ns.cmd](ns)
    except MsgcUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
