"""BDD step definitions for line formatting features."""

import io
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from pytest_bdd import given, parsers, then, when

from tintlog.core.handler import TextHandler
from tintlog.core.models import Attr, Level, Record, Value, attr


@dataclass
class FormattingScenarioContext:
    """Mutable state shared by the steps of one scenario."""

    sink: io.BytesIO = field(default_factory=io.BytesIO)
    handler: TextHandler | None = None
    sibling: TextHandler | None = None
    message: str = ""
    level: int = Level.INFO
    attrs: list[Attr] = field(default_factory=list)

    def line(self) -> str:
        return self.sink.getvalue().decode()


@pytest.fixture
def ctx() -> FormattingScenarioContext:
    """Fresh scenario context for each test."""
    return FormattingScenarioContext()


# === Handler Steps ===
@given("a text handler without colors")
def step_plain_handler(ctx: FormattingScenarioContext) -> None:
    ctx.handler = TextHandler(ctx.sink, colors=False)


@given("a text handler with colors")
def step_color_handler(ctx: FormattingScenarioContext) -> None:
    ctx.handler = TextHandler(ctx.sink, colors=True)


@given(parsers.parse('the handler is specialized with attribute "{key}" = "{value}"'))
def step_with_attr(ctx: FormattingScenarioContext, key: str, value: str) -> None:
    assert ctx.handler is not None
    ctx.handler = ctx.handler.with_attrs([attr(key, value)])


@given(parsers.parse('the handler is specialized with group "{name}"'))
def step_with_group(ctx: FormattingScenarioContext, name: str) -> None:
    assert ctx.handler is not None
    ctx.handler = ctx.handler.with_group(name)


@given(parsers.parse('a sibling handler is derived with group "{name}"'))
def step_sibling(ctx: FormattingScenarioContext, name: str) -> None:
    assert ctx.handler is not None
    ctx.sibling = ctx.handler.with_group(name)


# === Record Steps ===
@given(parsers.parse('a record "{message}" at level {level}'))
def step_record(ctx: FormattingScenarioContext, message: str, level: str) -> None:
    ctx.message = message
    ctx.level = Level[level]


@given(parsers.parse('the record has attribute "{key}" with string "{value}"'))
def step_string_attr(ctx: FormattingScenarioContext, key: str, value: str) -> None:
    ctx.attrs.append(Attr(key, Value.string(value)))


@given(parsers.parse('the record has attribute "{key}" with integer {value:d}'))
def step_int_attr(ctx: FormattingScenarioContext, key: str, value: int) -> None:
    ctx.attrs.append(Attr(key, Value.int64(value)))


@given(
    parsers.parse(
        'the record has a map attribute "{key}" with "{k1}"={v1:d} and "{k2}"={v2:d}'
    )
)
def step_map_attr(
    ctx: FormattingScenarioContext, key: str, k1: str, v1: int, k2: str, v2: int
) -> None:
    ctx.attrs.append(attr(key, {k1: v1, k2: v2}))


@given(parsers.parse('the record has an error attribute "{key}" with message "{text}"'))
def step_error_attr(ctx: FormattingScenarioContext, key: str, text: str) -> None:
    ctx.attrs.append(Attr(key, Value.any(RuntimeError(text))))


@when("the record is handled")
def step_handle(ctx: FormattingScenarioContext) -> None:
    assert ctx.handler is not None
    ctx.handler.handle(
        Record(
            time=datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc),
            level=ctx.level,
            message=ctx.message,
            attrs=tuple(ctx.attrs),
        )
    )


# === Output Steps ===
@then(parsers.parse("the line ends with '{suffix}'"))
def step_line_ends_with(ctx: FormattingScenarioContext, suffix: str) -> None:
    assert ctx.line().endswith(suffix + "\n"), ctx.line()


@then(parsers.parse("the line contains the red value '{value}'"))
def step_red_value(ctx: FormattingScenarioContext, value: str) -> None:
    assert f"\x1b[31m{value}\x1b[0m" in ctx.line()
