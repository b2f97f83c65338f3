"""
Prompt texts sent to the chat-completion API.

The system prompt keeps generated messages short: a single line stating
the core action, without filenames, punctuation or any reasoning.
"""

from __future__ import annotations

from textwrap import dedent
from typing import Dict, Optional


DEFAULT_LANGUAGE = "en"

_SYSTEM_PROMPTS: Dict[str, str] = {
    "zh": dedent(
        """\
        生成精简的SVN提交信息：
        1. 控制在15字以内
        2. 只提取最核心动作和目的
        3. 忽略具体文件名和细节
        4. 不列举具体项目
        5. 不使用标点符号
        6. 严禁输出任何推理过程或解释
        7. 只输出提交信息本身，不要有其他任何内容"""
    ),
    "en": dedent(
        """\
        Generate minimal SVN commit message:
        1. Maximum 8 words
        2. Extract only core action and purpose
        3. Ignore specific filenames and details
        4. No listing of items
        5. No punctuation
        6. Strictly forbidden to output any reasoning process
        7. Output only the commit message itself with no other content"""
    ),
    "ja": dedent(
        """\
        簡潔なSVNコミットメッセージ：
        1. 15字以内
        2. 核心動作と目的のみ
        3. ファイル名や詳細は無視
        4. 項目列挙禁止
        5. 句読点使用禁止
        6. 推論過程の出力は厳禁
        7. コミットメッセージのみを出力し他の内容は含めない"""
    ),
}

# (request line, extra requirement label)
_USER_TEMPLATES: Dict[str, tuple] = {
    "zh": ("请根据以下代码变更生成提交信息：", "额外要求："),
    "en": ("Generate a commit message for the following code changes:", "Additional requirement: "),
    "ja": ("以下のコード変更に基づいてコミットメッセージを生成してください：", "追加要件："),
}

SUPPORTED_LANGUAGES = tuple(_SYSTEM_PROMPTS)


def _normalize(language: Optional[str]) -> str:
    code = (language or "").strip().lower()
    return code if code in _SYSTEM_PROMPTS else DEFAULT_LANGUAGE


def system_prompt(language: Optional[str]) -> str:
    """Return the system instruction for ``language``.

    Unrecognized codes fall back to :data:`DEFAULT_LANGUAGE`.
    """
    return _SYSTEM_PROMPTS[_normalize(language)]


def user_prompt(diff: str, extra: Optional[str] = None, language: Optional[str] = None) -> str:
    """Build the user instruction carrying the diff and optional guidance."""
    request, extra_label = _USER_TEMPLATES[_normalize(language)]
    prompt = f"{request}\n\n{diff}"
    if extra:
        prompt += f"\n\n{extra_label}{extra}"
    return prompt
