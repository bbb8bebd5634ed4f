#!/usr/bin/env python
import argparse
import logging
from pathlib import Path

from renscriptpy.ast import ScriptAst
from renscriptpy.diagnostics import Diagnostic
from renscriptpy.parser import parse_script
from renscriptpy.reload import HotReloadOptions


def format_diagnostic(path: str, diagnostic: Diagnostic) -> str:
    line = f"{path}:{diagnostic.line}:{diagnostic.column}: {diagnostic.severity} {diagnostic.code}: {diagnostic.message}"
    if diagnostic.suggestion is not None:
        line += f" (did you mean {diagnostic.suggestion!r}?)"
    if diagnostic.hint is not None:
        line += f"\n    hint: {diagnostic.hint}"
    return line


def format_ast(ast: ScriptAst) -> str:
    if ast.is_empty:
        return "<empty script>"
    lines = [f"{ast.object_kind.value} {ast.name!r}"]
    for section in ast.sections:
        lines.append(f"  [{section}]")
        for prop in ast.properties:
            if prop.section != section:
                continue
            details: list[str] = []
            if prop.default_value is not None:
                details.append(f"default={prop.default_value!r}")
            if prop.min is not None:
                details.append(f"min={prop.min!r}")
            if prop.max is not None:
                details.append(f"max={prop.max!r}")
            if prop.options is not None:
                details.append(f"options={list(prop.options)!r}")
            if prop.once:
                details.append("once")
            if prop.description is not None:
                details.append(f"description={prop.description!r}")
            lines.append(f"    {prop.name}: {prop.prop_type} {' '.join(details)}".rstrip())
    if ast.methods:
        lines.append(f"  methods: {', '.join(ast.methods)}")
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Parse a RenScript file and print its AST and diagnostics.")
    parser.add_argument("paths", nargs="+", type=Path)
    parser.add_argument("--log-level", default=None, help="Override the logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    options = HotReloadOptions()
    level = (args.log_level or options.log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=options.log_format)

    for path in args.paths:
        text = path.read_text(encoding="utf-8")
        ast = parse_script(text)
        print(f"===== {path} =====")
        print(format_ast(ast))
        if not ast.diagnostics:
            print("(no diagnostics)")
        for diagnostic in ast.diagnostics:
            print(format_diagnostic(str(path), diagnostic))


if __name__ == "__main__":
    main()
