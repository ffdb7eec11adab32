# ruff: noqa: RUF001

from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime

from ..schemas.entries import JournalEntry

_ENTRY_EXCERPT_CHARS = 500

SYSTEM_PROMPTS: dict[str, str] = {
    "tr": (
        "Sen empatik ve destekleyici bir günlük asistanısın. Kullanıcının duygularını "
        "anlayarak kısa, anlamlı ve düşündürücü yorumlar yaparsın. Türkçe yanıt ver. "
        "Yanıtların 2-3 cümle olsun."
    ),
    "en": (
        "You are an empathetic, supportive journaling companion. Understand the "
        "writer's feelings and reply with short, meaningful, thought-provoking "
        "comments of 2-3 sentences."
    ),
}

PROMPT_GENERATION: dict[str, str] = {
    "tr": (
        "Sen empatik bir günlük asistanısın. Kullanıcıya Türkçe olarak düşünmeye teşvik "
        "edecek, derin ve anlamlı bir günlük sorusu sor. Soru kısa, açık ve kişisel olsun. "
        "Sadece soruyu yaz, başka bir şey yazma."
    ),
    "en": (
        "You are an empathetic journaling companion. Ask one deep, meaningful journal "
        "question that invites reflection. Keep it short, open and personal. "
        "Write only the question."
    ),
}

JOURNAL_QUESTIONS: dict[str, tuple[str, ...]] = {
    "tr": (
        "Bugün seni en çok ne düşündürdü?",
        "Hayatında bir şeyi değiştirebileceğini bilsen neyi değiştirirdin?",
        "Bu hafta sana ne ilham verdi?",
        "Kendini en mutlu hissettiğin anı düşünürsen, o an nasıl hissediyordun?",
        "Bugün bir şeylerden memnun kaldın mı?",
        "Gelecekteki sana bir mesaj bırakmak istesen ne yazardın?",
        "Bugün bir zorlukla karşılaştın mı? Onu nasıl ele aldın?",
        "Sana göre mutluluk nedir?",
    ),
    "en": (
        "What made you think the most today?",
        "If you could change one thing in your life, what would it be?",
        "What inspired you this week?",
        "Recall the moment you felt happiest. How did it feel?",
        "Was there something that pleased you today?",
        "What would you write in a message to your future self?",
        "Did you face a difficulty today? How did you handle it?",
        "What does happiness mean to you?",
    ),
}

_DAYPARTS: dict[str, tuple[str, str, str, str]] = {
    "tr": ("Sabah ", "Öğleden sonra ", "Akşam ", "Gece "),
    "en": ("Morning, ", "Afternoon, ", "Evening, ", "Night, "),
}

_WEEK_PARTS: dict[str, tuple[str, str]] = {
    "tr": ("hafta içi ", "hafta sonu "),
    "en": ("weekday: ", "weekend: "),
}

MISSING_KEYS_MESSAGE: dict[str, str] = {
    "tr": (
        "API anahtarları bulunamadı veya yapılandırılmadı. "
        "Lütfen ayarlardan API anahtarlarınızı ekleyin."
    ),
    "en": "No API keys are configured. Add a provider API key in the settings.",
}


def normalize_locale(locale: str | None) -> str:
    return locale if locale in SYSTEM_PROMPTS else "tr"


def contextual_prompt(
    now: datetime,
    locale: str | None = None,
    rng: random.Random | None = None,
) -> str:
    """Offline journal question prefixed with the part of day and week."""

    locale_norm = normalize_locale(locale)
    morning, afternoon, evening, night = _DAYPARTS[locale_norm]
    if 5 <= now.hour < 12:
        context = morning
    elif 12 <= now.hour < 18:
        context = afternoon
    elif 18 <= now.hour < 22:
        context = evening
    else:
        context = night

    weekday, weekend = _WEEK_PARTS[locale_norm]
    context += weekend if now.weekday() >= 5 else weekday

    question = (rng or random).choice(JOURNAL_QUESTIONS[locale_norm])
    return f"{context}{question}"


def build_reflection_prompt(entry_text: str, locale: str | None = None) -> str:
    if normalize_locale(locale) == "tr":
        return (
            "Aşağıdaki günlük yazısını oku ve kullanıcıya empatik, destekleyici bir yorum "
            f"yap:\n\n{entry_text}"
        )
    return (
        "Read the journal entry below and reply to the writer with an empathetic, "
        f"supportive comment:\n\n{entry_text}"
    )


def build_weekly_summary_prompt(
    entries: Sequence[JournalEntry],
    locale: str | None = None,
) -> str:
    locale_norm = normalize_locale(locale)
    mood_label = "ruh hali" if locale_norm == "tr" else "mood"
    lines = []
    for entry in sorted(entries, key=lambda item: (item.date, item.created_at)):
        mood = f" ({mood_label} {entry.mood}/5)" if entry.mood is not None else ""
        excerpt = entry.text.strip()[:_ENTRY_EXCERPT_CHARS]
        lines.append(f"- {entry.date}{mood}: {excerpt}")
    body = "\n".join(lines)

    if locale_norm == "tr":
        return (
            "Aşağıda kullanıcının bu haftaki günlük yazıları var. Haftayı sıcak ve "
            "destekleyici bir dille, en fazla 5 cümlede özetle. Öne çıkan duyguları ve "
            "tekrar eden temaları belirt, tavsiye verme.\n\n"
            f"{body}"
        )
    return (
        "Below are the writer's journal entries for this week. Summarise the week in "
        "at most five warm, supportive sentences. Name the dominant feelings and "
        "recurring themes; do not give advice.\n\n"
        f"{body}"
    )
