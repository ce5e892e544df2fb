"""Default heuristics for component detection and story synthesis."""

from __future__ import annotations

from ..models import ContextDecorator

# Pass-through HTML attributes that never become story args.
RESERVED_PROPS: tuple[str, ...] = (
    "children",
    "className",
    "style",
    "id",
    "tabIndex",
    "role",
    "title",
    "onClick",
    "onChange",
    "onFocus",
    "onBlur",
    "ref",
    "key",
)

EXCLUDED_NAME_FRAGMENTS: tuple[str, ...] = (
    "utils",
    "config",
    "helper",
    "constant",
)

HOOK_PREFIX = "use"

EXCLUDED_NAME_SUFFIXES: tuple[str, ...] = (
    "Context",
    "Provider",
)

# Style-variant factories: a declaration calling one of these is a helper, not a component.
STYLE_MARKERS: tuple[str, ...] = (
    "cva(",
    "cn(",
    "clsx(",
    "twMerge(",
)

VARIANTS_MARKER = "variants"
RENDER_MARKERS: tuple[str, ...] = ("React.", "<")

COMPONENT_NAME_PATTERN = r"^[A-Z][a-zA-Z]*$"

SAMPLE_STRING = '"Sample Text"'
SAMPLE_NUMBER = "123"
SAMPLE_BOOLEAN = "true"
PLACEHOLDER_VALUE = "undefined"
PLACEHOLDER_NOTE = "TODO: Provide appropriate value"

STORYBOOK_PACKAGE = "@storybook/react"
TITLE_PREFIX = "Components"
COMPONENTS_DIR = "components"
STORY_EXTENSION = ".stories.tsx"
SOURCE_PATTERN = "**/*.tsx"

CHART_DECORATOR = """(Story) => (
  <ChartContainer config={{ desktop: { label: 'Desktop', color: 'hsl(var(--chart-1))' } }}>
    <Story />
  </ChartContainer>
)"""

FORM_DECORATOR = """(Story) => {
  const form = useForm();
  return (
    <FormProvider {...form}>
      <Story />
    </FormProvider>
  );
}"""

CONTEXT_DECORATORS: tuple[ContextDecorator, ...] = (
    ContextDecorator(
        name="chart",
        marker="useChart()",
        decorator=CHART_DECORATOR,
        imports=("import { ChartContainer } from './chart';",),
        provides=("ChartContainer",),
    ),
    ContextDecorator(
        name="form",
        marker="useFormContext()",
        decorator=FORM_DECORATOR,
        imports=("import { useForm, FormProvider } from 'react-hook-form';",),
    ),
)
