from __future__ import annotations

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup


BTN_HOME = "🏠 Home"
BTN_DAY = "📅 My Day"
BTN_FOODS = "🥗 Foods"
BTN_WORKOUTS = "🏋️ Workouts"
BTN_CALC = "🧮 Calculator"
BTN_WEIGHT = "⚖️ Weight"
BTN_PREV_DAY = "◀️ Prev day"
BTN_TODAY = "📍 Today"
BTN_NEXT_DAY = "Next day ▶️"
BTN_HELP = "❓ Help"


MAIN_BUTTONS: list[list[str]] = [
    [BTN_HOME, BTN_DAY],
    [BTN_FOODS, BTN_WORKOUTS],
    [BTN_CALC, BTN_WEIGHT],
    [BTN_PREV_DAY, BTN_TODAY, BTN_NEXT_DAY],
    [BTN_HELP],
]


def main_menu_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=t) for t in row] for row in MAIN_BUTTONS],
        resize_keyboard=True,
        input_field_placeholder="Pick a section or type a command",
    )
