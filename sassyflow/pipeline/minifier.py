"""CSS minification for generated stylesheets."""

import re

import sass

from sassyflow.core.exceptions.errors import MinifyError

# Strings and unquoted url() tokens are matched first so comment markers
# inside them are kept.
_TOKEN = re.compile(
    r"""("(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*'|url\([^)"']*\))|/\*.*?\*/""",
    re.DOTALL,
)


def strip_comments(css: str) -> str:
    """Remove ``/* ... */`` comments outside strings and url() tokens."""
    return _TOKEN.sub(lambda m: m.group(1) or "", css)


class CssMinifier:
    """Stateless css compressor.

    libsass' compressed output style drops ordinary comments and compacts
    whitespace; the ``/*! ... */`` comments it preserves are removed
    afterwards.
    """

    def compress(self, css: str | None) -> str:
        """Compress css text.

        Args:
            css: Stylesheet text. None or empty yields an empty string.

        Returns:
            Minified css.

        Raises:
            MinifyError: If the css cannot be parsed.
        """
        if not css or not css.strip():
            return ""

        try:
            minified = sass.compile(string=css, output_style="compressed")
        except sass.CompileError as e:
            raise MinifyError(
                "Failed to minify css",
                details={"error": str(e).strip()},
            ) from e

        # libsass marks non-ascii output with a BOM in compressed mode
        return strip_comments(minified.lstrip("\ufeff")).strip()


def compress(css: str | None) -> str:
    """Compress css with a default CssMinifier."""
    return CssMinifier().compress(css)
