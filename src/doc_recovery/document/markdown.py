"""Render canonical blocks, pages and documents as Markdown.

Output is plain CommonMark: '#' headings, '- ' bullets (ordered items keep
their original marker), pipe tables with a '|---|' separator and code as
four-space indented blocks.  Re-classifying the output recovers the same
headings, list items and tables.
"""

from doc_recovery.document.schema import Block, CodeBlock, HeadingBlock, ListBlock, Page, ParagraphBlock, Table, TableBlock

PAGE_SEPARATOR = "\n\n---\n\n"

CODE_INDENT = "    "


def render_heading(level: int, text: str) -> str:
    """'#' * level + ' ' + text."""
    return "#" * level + " " + text


def render_list(block: ListBlock) -> str:
    """One line per item, indented two spaces per nesting level."""
    lines = []
    for item in block.items:
        marker = item.marker if block.ordered else "-"
        lines.append("  " * item.depth + f"{marker} {item.content}")
    return "\n".join(lines)


def _render_row(cells: list[str]) -> str:
    """Format a list of cell strings as a pipe-delimited table row."""
    # Embedded newlines (multi-line CSV cells) would break the row apart
    cleaned = [cell.replace("\n", " ").strip() for cell in cells]
    return "| " + " | ".join(cleaned) + " |"


def render_table(table: Table, show_title: bool = True) -> str:
    """Render a Table as a pipe table, with an optional bold title line.

    Header-less tables get an empty header row so the output is still a valid
    pipe table.
    """
    width = table.column_count
    headers = table.headers if table.headers is not None else [""] * width
    lines = []
    if table.title and show_title:
        lines.extend([f"**{table.title}**", ""])
    lines.append(_render_row(headers))
    lines.append("|" + "|".join(["---"] * max(len(headers), 1)) + "|")
    lines.extend(_render_row(row) for row in table.rows)
    return "\n".join(lines)


def render_code(block: CodeBlock) -> str:
    return "\n".join(CODE_INDENT + line for line in block.lines)


def render_block(block: Block, headings: frozenset[str] = frozenset()) -> str:
    """Render any page block; a table title already shown in ``headings`` is not repeated."""
    match block:
        case HeadingBlock(level=level, text=text):
            return render_heading(level, text)
        case ParagraphBlock(text=text):
            return text
        case ListBlock():
            return render_list(block)
        case TableBlock(table=table):
            return render_table(table, show_title=table.title not in headings)
        case CodeBlock():
            return render_code(block)
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def render_page(blocks: list[Block], raw_text: str) -> str:
    """Blocks in source order separated by blank lines; raw text if there are none."""
    if not blocks:
        return raw_text
    headings = frozenset(block.text for block in blocks if isinstance(block, HeadingBlock))
    return "\n\n".join(render_block(block, headings) for block in blocks)


def render_document(pages: list[Page]) -> str:
    """Join page Markdown, with a horizontal rule between pages."""
    return PAGE_SEPARATOR.join(page.markdown_content for page in pages)
