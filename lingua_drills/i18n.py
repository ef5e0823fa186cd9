"""
Localized display strings for the drill screens.

Lookups are used for labels only; no drill decision depends on them.
"""

import logging
import re
from typing import Any, Dict, Optional

from .config import Config


logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        # Flashcards
        "scene_cards": "Scene Cards",
        "card_of": "Card {current} of {total}",
        "view_mode": "View Mode",
        "drill_mode": "Typing Drill",
        "speech_mode": "Speech Drill",
        "loading_scene": "Loading Scene",
        "visualizing": "Visualizing...",
        "tap_meaning": "Tap card for meaning",
        "translation": "TRANSLATION",
        "context": "Context",
        "got_it": "Got it",

        # Drill / Speech
        "drill_instruction": "Listen and type exactly what you hear.",
        "speech_instruction": "Tap mic and read the sentence aloud.",
        "perfect": "Perfect! Press Enter",
        "try_again": "Not quite. Try again!",
        "check": "Check",
        "listening": "Listening...",
        "accuracy": "Accuracy",
        "type_response": "Type your response...",
        "speech_unavailable": "Speech recognition is not available here. Use replay instead.",

        # Exam
        "exam_complete": "Exam Complete!",
        "keep_practicing": "Keep practicing!",
        "perfect_score": "Perfect Score!",
        "great_job": "Great Job!",
        "good_effort": "Good effort.",
        "you_got": "You got {score} out of {total} correct",
        "try_retry": "Try Again",
        "question": "Question",
        "explanation": "Explanation",
        "next_question": "Next Question",
        "see_results": "See Results",
    },
    "zh": {
        # Flashcards
        "scene_cards": "场景卡片",
        "card_of": "第 {current} / {total} 张",
        "view_mode": "浏览模式",
        "drill_mode": "听写模式",
        "speech_mode": "口语模式",
        "loading_scene": "场景加载中",
        "visualizing": "生成画面...",
        "tap_meaning": "点击查看释义",
        "translation": "中文翻译",
        "context": "语境",
        "got_it": "已掌握",

        # Drill / Speech
        "drill_instruction": "听录音，输入您听到的句子。",
        "speech_instruction": "点击麦克风，大声朗读句子。",
        "perfect": "完美！按回车键继续",
        "try_again": "不太对，再试一次！",
        "check": "检查",
        "listening": "正在听...",
        "accuracy": "准确度",
        "type_response": "输入您的回复...",
        "speech_unavailable": "当前环境不支持语音识别，请使用重播。",

        # Exam
        "exam_complete": "测验完成！",
        "keep_practicing": "继续加油！",
        "perfect_score": "满分！你是大师！",
        "great_job": "太棒了！",
        "good_effort": "不错的尝试。",
        "you_got": "答对 {score} / {total} 题",
        "try_retry": "再试一次",
        "question": "问题",
        "explanation": "解析",
        "next_question": "下一题",
        "see_results": "查看结果",
    },
}


class Translator:
    """Look up display strings for one UI language, falling back to English."""

    def __init__(self, language: str = Config.UI_LANGUAGE):
        if language not in TRANSLATIONS:
            logger.warning(f"Unsupported UI language '{language}', using English")
            language = "en"
        self.language = language

    def t(self, key: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Translate a key, substituting ``{name}`` placeholders from params.

        Unknown keys are returned unchanged; placeholders without a value
        are left as written.
        """
        text = TRANSLATIONS[self.language].get(key)
        if text is None:
            text = TRANSLATIONS["en"].get(key, key)
        if not params:
            return text
        return _PLACEHOLDER_RE.sub(
            lambda match: str(params.get(match.group(1), match.group(0))),
            text
        )
