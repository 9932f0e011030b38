"""Internationalisation strings for the Chess3D UI.

Locales are plain values: pick one with :func:`strings_for` and hand it to
the widgets that display text.

Usage::

    from chess3d.ui.i18n import strings_for

    s = strings_for("zh")
    print(s.new_game)               # "新游戏"
    print(s.wins(s.side_name(Side.WHITE)))
"""

from __future__ import annotations

from dataclasses import dataclass

from chess3d.core.enums import Side

DEFAULT_LANGUAGE = "zh"
FALLBACK_LANGUAGE = "en"


@dataclass(frozen=True)
class Strings:
    code: str

    # ── Main window ──────────────────────────────────────────────────────
    app_title: str
    menu_game: str
    menu_view: str
    menu_settings: str
    menu_help: str
    new_game: str
    close_window: str
    reset_camera: str
    language: str
    show_help: str
    help_title: str
    help_text: str

    # ── Info panel ───────────────────────────────────────────────────────
    current_turn: str
    white: str
    black: str
    check: str
    checkmate: str
    stalemate: str
    draw: str
    winner_fmt: str  # "{side} wins"
    move_history: str

    # ── Status bar ───────────────────────────────────────────────────────
    status_ready: str
    status_illegal_move: str  # "Illegal move: {move}"

    def side_name(self, side: Side) -> str:
        return self.white if side == Side.WHITE else self.black

    def wins(self, side_name: str) -> str:
        return self.winner_fmt.format(side=side_name)


_EN = Strings(
    code="en",
    app_title="3D Chess",
    menu_game="Game",
    menu_view="View",
    menu_settings="Settings",
    menu_help="Help",
    new_game="New Game",
    close_window="Close Window",
    reset_camera="Reset Camera",
    language="Language",
    show_help="Chess3D Help",
    help_title="3D Chess Help",
    help_text=(
        "Controls:\n"
        "• Click a piece to select it\n"
        "• Click a highlighted square to move\n"
        "• Right-drag to rotate the view\n"
        "• Scroll wheel to zoom\n"
        "\n"
        "Rules:\n"
        "• White moves first\n"
        "• Take turns moving pieces\n"
        "• Checkmate the opponent's king to win"
    ),
    current_turn="Current Turn",
    white="White",
    black="Black",
    check="Check!",
    checkmate="Checkmate!",
    stalemate="Stalemate!",
    draw="Draw",
    winner_fmt="{side} wins",
    move_history="Move History",
    status_ready="Ready",
    status_illegal_move="Illegal move: {move}",
)

_ZH = Strings(
    code="zh",
    app_title="3D 国际象棋",
    menu_game="游戏",
    menu_view="视图",
    menu_settings="设置",
    menu_help="帮助",
    new_game="新游戏",
    close_window="关闭窗口",
    reset_camera="重置摄像机",
    language="语言",
    show_help="Chess3D 帮助",
    help_title="3D 国际象棋帮助",
    help_text=(
        "操作说明:\n"
        "• 点击棋子选中\n"
        "• 点击有效移动位置移动棋子\n"
        "• 右键拖拽旋转视角\n"
        "• 滚轮缩放视角\n"
        "\n"
        "游戏规则:\n"
        "• 白方先行\n"
        "• 轮流移动棋子\n"
        "• 将死对方王即获胜"
    ),
    current_turn="当前回合",
    white="白方",
    black="黑方",
    check="将军!",
    checkmate="将死!",
    stalemate="和棋!",
    draw="逼和",
    winner_fmt="{side}获胜",
    move_history="移动记录",
    status_ready="就绪",
    status_illegal_move="非法移动: {move}",
)

_LOCALES: dict[str, Strings] = {
    "zh": _ZH,
    "en": _EN,
}

LANGUAGES: list[tuple[str, str]] = [
    ("zh", "中文"),
    ("en", "English"),
]


def strings_for(code: str | None) -> Strings:
    """Return the locale for *code*. Unknown codes fall back to English."""
    if code is None:
        return _LOCALES[FALLBACK_LANGUAGE]
    return _LOCALES.get(code, _LOCALES[FALLBACK_LANGUAGE])


def is_supported(code: str) -> bool:
    return code in _LOCALES
