# src/mender/utils/markdown.py


def strip_markdown_code_block(text: str) -> str:
    """
    Removes one Markdown code fence (``` or ```json) wrapping the whole text.
    LLMs often fence JSON answers even when told not to.
    Text without an opening fence is returned stripped but otherwise untouched.
    """
    text = text.strip()
    lines = text.splitlines()
    if not lines or not lines[0].strip().startswith("```"):
        return text

    lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]

    return "\n".join(lines)
