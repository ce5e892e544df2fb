"""Tests for context decorator inference."""

from __future__ import annotations

from storygen.analysis.decorators import DecoratorInferencer
from storygen.models import ContextDecorator

CHART_SOURCE = """
export function ChartTooltip() {
  const { config } = useChart();
  return <div />;
}
"""


def test_no_markers_means_no_decorators() -> None:
    requirements = DecoratorInferencer().infer("export const Plain = () => <div />;")

    assert requirements.decorators == []
    assert requirements.imports == []


def test_chart_marker_adds_decorator_and_import() -> None:
    requirements = DecoratorInferencer().infer(CHART_SOURCE, ["ChartTooltip"])

    assert [decorator.name for decorator in requirements.decorators] == ["chart"]
    assert requirements.imports == ["import { ChartContainer } from './chart';"]


def test_chart_import_skipped_when_file_exports_container() -> None:
    requirements = DecoratorInferencer().infer(CHART_SOURCE, ["ChartTooltip", "ChartContainer"])

    assert [decorator.name for decorator in requirements.decorators] == ["chart"]
    assert requirements.imports == []


def test_form_marker_always_imports_react_hook_form() -> None:
    source = "export function FormLabel() { const ctx = useFormContext(); return <label />; }"

    requirements = DecoratorInferencer().infer(source, ["FormLabel", "FormProvider"])

    assert [decorator.name for decorator in requirements.decorators] == ["form"]
    assert requirements.imports == ["import { useForm, FormProvider } from 'react-hook-form';"]


def test_both_markers_keep_context_order() -> None:
    source = "useFormContext(); useChart();"

    requirements = DecoratorInferencer().infer(source)

    assert [decorator.name for decorator in requirements.decorators] == ["chart", "form"]
    assert len(requirements.imports) == 2


def test_custom_contexts_share_imports_once() -> None:
    theme = ContextDecorator(
        name="theme",
        marker="useTheme()",
        decorator="(Story) => <ThemeProvider><Story /></ThemeProvider>",
        imports=("import { ThemeProvider } from './theme';",),
    )
    palette = ContextDecorator(
        name="palette",
        marker="usePalette()",
        decorator="(Story) => <ThemeProvider><Story /></ThemeProvider>",
        imports=("import { ThemeProvider } from './theme';",),
    )

    requirements = DecoratorInferencer([theme, palette]).infer("useTheme(); usePalette();")

    assert requirements.imports == ["import { ThemeProvider } from './theme';"]
