import re

_OPENING_FENCE = re.compile(r"\A```[\w+.#-]*[ \t]*\r?\n")

_CLOSING_FENCES = ("```\r\n", "```\n", "```")


def strip_code_fence(code: str) -> str:
    """Remove a single surrounding markdown code fence from source text.

    At most one opening fence is removed and each closing variant is tried
    once, so duplicated or nested fences survive.
    Input without fences is returned unchanged.
    """
    opening = _OPENING_FENCE.match(code)
    if opening:
        code = code[opening.end() :]
    else:
        code = code.removeprefix("```")

    for fence in _CLOSING_FENCES:
        code = code.removesuffix(fence)

    return code
