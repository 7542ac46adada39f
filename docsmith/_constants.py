"""Common literal values used across docsmith.

These constants keep placeholder formats and navigation defaults centralized
so the renderer, the navigation builder, the CLI, and tests can import the
same values without drifting.

Examples
--------
>>> from docsmith import _constants
>>> _constants.PLACEHOLDER_TEMPLATE.format(index=0, name="Alert")
'__COMPONENT_0_Alert__'
>>> _constants.ERROR_HEADING_TEMPLATE.format(name="Card")
'**Component Error: Card**'
"""

PLACEHOLDER_TEMPLATE = "__COMPONENT_{index}_{name}__"
PLACEHOLDER_PATTERN = r"__COMPONENT_(\d+)_([A-Z][A-Za-z0-9]*)__"
ERROR_HEADING_TEMPLATE = "**Component Error: {name}**"

ROOT_PATH = "/docs"
ROOT_TITLE = "Documentation"
WORDS_PER_MINUTE = 200
DESCRIPTION_LIMIT = 150
MARKDOWN_SUFFIXES = (".md", ".mdx")
