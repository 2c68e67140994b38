from __future__ import annotations

from dataclasses import dataclass

TRAILING_COMMA_MODES = ("none", "es5", "all")


@dataclass(frozen=True)
class StyleConfig:
    # Indentation (used by every formatter)
    tab_width: int = 2
    use_tabs: bool = False

    # Script grammars only
    semicolons: bool = True
    single_quote: bool = False
    trailing_comma: str = "es5"  # none | es5 | all

    # Wrap width for delegated grammars
    print_width: int = 80

    # UI-only; the formatters never read it.
    auto_format: bool = False

    @property
    def indent_unit(self) -> str:
        if self.use_tabs:
            return "\t"
        return " " * max(1, int(self.tab_width))
