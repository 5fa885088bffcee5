from __future__ import annotations

import asyncio
import datetime as dt
import logging
from html import escape
from zoneinfo import ZoneInfo

from aiogram import Bot, Dispatcher, F, Router
from aiogram.client.default import DefaultBotProperties
from aiogram.filters import Command
from aiogram.types import ErrorEvent, Message

from fittrack.config import settings
from fittrack.daily import daily_totals, day_progress, group_by_meal
from fittrack.db import SessionLocal, engine
from fittrack.errors import FitTrackError, InvalidInput
from fittrack.food_service import MEALS, FoodService
from fittrack.init_db import init_db
from fittrack.keyboards import (
    BTN_CALC,
    BTN_DAY,
    BTN_FOODS,
    BTN_HELP,
    BTN_HOME,
    BTN_NEXT_DAY,
    BTN_PREV_DAY,
    BTN_TODAY,
    BTN_WEIGHT,
    BTN_WORKOUTS,
    main_menu_kb,
)
from fittrack.nutrition import MacroPreferences, outside_recommended
from fittrack.parsing import (
    FOOD_KEY_ALIASES,
    WORKOUT_KEY_ALIASES,
    command_payload,
    map_keys,
    parse_date_arg,
    parse_foods_query,
    parse_id,
    parse_kv,
)
from fittrack.profile_service import ProfileService, calculator_inputs, parse_profile_patch
from fittrack.render import (
    day_summary,
    foods_table,
    profile_card,
    targets_summary,
    weight_report,
    workouts_list,
)
from fittrack.workouts import MUSCLE_GROUPS, WorkoutService, strength_volume


logger = logging.getLogger(__name__)

router = Router()

# chat_id -> date the day/log/workout commands act on
_selected_dates: dict[int, dt.date] = {}


def _today() -> dt.date:
    return dt.datetime.now(ZoneInfo(settings.tz)).date()


def _selected(message: Message) -> dt.date:
    return _selected_dates.get(message.chat.id) or _today()


def _is_owner(message: Message) -> bool:
    if settings.owner_telegram_id is None:
        return True
    return bool(message.from_user and message.from_user.id == settings.owner_telegram_id)


router.message.filter(_is_owner)


HELP_TEXT = (
    "<b>Profile & targets</b>\n"
    "- /profile — profile and current targets\n"
    "- /calc weight=82 goal=cut — preview targets without saving\n"
    "- /apply weight=82 goal=cut — save profile changes and targets\n"
    "  fields: name, weight, height, age, gender (male/female), activity "
    "(sedentary/light/moderate/very/extra), goal (cut/maintain/bulk), protein (g/kg), fat (0.25 or 25%)\n"
    "- /weight 81.5 — log today's weight and recalculate\n"
    "- /baseline_reset — forget the baseline, the next /apply sets a new one\n\n"
    "<b>Foods</b>\n"
    "- /foods [query] [#category] — browse the food database\n"
    "- /food_add name=Greek yogurt; serving=100; unit=g; kcal=59; protein=10; carbs=3.6; fat=0.4; category=dairy; tags=protein, snack\n"
    "- /food_edit 12 kcal=60; protein=10.5\n"
    "- /food_del 12\n\n"
    "<b>Food log</b>\n"
    "- /date 2024-05-01 | today | +1 | -1 — choose the day\n"
    f"- /log lunch 12 150 — meal ({'/'.join(MEALS)}), food id, quantity in serving units\n"
    "- /log_del 7\n"
    "- /day — the day's meals and progress against targets\n\n"
    "<b>Workouts</b>\n"
    "- /workout name=Bench press; muscle=chest; sets=4; reps=8; weight=60\n"
    "- /workout name=Run; muscle=cardio; type=cardio; duration=30; distance=5\n"
    f"  muscle groups: {', '.join(MUSCLE_GROUPS)}\n"
    "- /workouts — the day's workouts\n"
    "- /workout_del 3"
)


@router.errors()
async def on_error(event: ErrorEvent) -> bool:
    exc = event.exception
    message = event.update.message
    if isinstance(exc, FitTrackError):
        text = f"⚠️ {escape(str(exc))}"
    else:
        logger.error("update %s failed", event.update.update_id, exc_info=exc)
        text = "Something went wrong, nothing was saved. Please try again."
    if message is not None:
        await message.answer(text, reply_markup=main_menu_kb())
    return True


@router.message(Command("start"))
@router.message(F.text == BTN_HOME)
async def cmd_start(message: Message) -> None:
    async with SessionLocal() as db:
        svc = ProfileService(db)
        profile = await svc.get_profile()
        await db.commit()
    await message.answer(
        f"👋 Hi, {escape(profile.display_name)}!\n"
        "Set your profile with /apply, log food with /log and workouts with /workout.\n"
        "/help lists everything.",
        reply_markup=main_menu_kb(),
    )


@router.message(Command("help"))
@router.message(F.text == BTN_HELP)
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT, reply_markup=main_menu_kb())


@router.message(Command("profile"))
async def cmd_profile(message: Message) -> None:
    async with SessionLocal() as db:
        profile = await ProfileService(db).get_profile()
        await db.commit()
    await message.answer(profile_card(profile), reply_markup=main_menu_kb())


def _warnings_text(prefs: MacroPreferences) -> str:
    warnings = outside_recommended(prefs)
    return "".join(f"\n⚠️ {escape(w)}" for w in warnings)


@router.message(Command("calc"))
@router.message(F.text == BTN_CALC)
async def cmd_calc(message: Message) -> None:
    patch = parse_profile_patch(parse_kv(command_payload(message.text)))
    async with SessionLocal() as db:
        svc = ProfileService(db)
        profile = await svc.get_profile()
        result = svc.preview(profile, patch)
    body, _, goal, prefs = calculator_inputs(profile, patch)
    await message.answer(
        "🧮 <b>Preview</b> (not saved, /apply to keep it)\n"
        + targets_summary(result, weight_kg=body.weight_kg, goal=goal)
        + _warnings_text(prefs),
        reply_markup=main_menu_kb(),
    )


@router.message(Command("apply"))
async def cmd_apply(message: Message) -> None:
    patch = parse_profile_patch(parse_kv(command_payload(message.text)))
    async with SessionLocal() as db:
        svc = ProfileService(db)
        result = await svc.apply(patch, today=_today())
        profile = await svc.get_profile()
        await db.commit()
    prefs = MacroPreferences(protein_factor=profile.protein_factor, fat_percentage=profile.fat_percentage)
    await message.answer(
        "✅ <b>Settings applied</b>\n"
        + targets_summary(result, weight_kg=profile.weight_kg, goal=profile.goal)
        + _warnings_text(prefs),
        reply_markup=main_menu_kb(),
    )


@router.message(Command("baseline_reset"))
async def cmd_baseline_reset(message: Message) -> None:
    async with SessionLocal() as db:
        await ProfileService(db).reset_baseline()
        await db.commit()
    await message.answer("Baseline cleared. The next /apply starts a new one.", reply_markup=main_menu_kb())


@router.message(Command("weight"))
@router.message(F.text == BTN_WEIGHT)
async def cmd_weight(message: Message) -> None:
    payload = command_payload(message.text)
    async with SessionLocal() as db:
        svc = ProfileService(db)
        if payload:
            result = await svc.update_weight(_today(), payload)
        summary = await svc.weight_summary()
        await db.commit()
    text = weight_report(summary)
    if payload:
        text = f"⚖️ Weight logged, new target: <b>{result.calorie_target} kcal</b>\n\n" + text
    await message.answer(text, reply_markup=main_menu_kb())


@router.message(Command("foods"))
@router.message(F.text == BTN_FOODS)
async def cmd_foods(message: Message) -> None:
    search, category = parse_foods_query(command_payload(message.text))
    async with SessionLocal() as db:
        svc = FoodService(db)
        foods = await svc.list_foods(search=search or None, category=category)
        categories = await svc.categories()
    await message.answer(
        foods_table(foods) + "\nCategories: " + ", ".join(f"#{c}" for c in categories),
        reply_markup=main_menu_kb(),
    )


@router.message(Command("food_add"))
async def cmd_food_add(message: Message) -> None:
    raw = map_keys(parse_kv(command_payload(message.text)), FOOD_KEY_ALIASES)
    async with SessionLocal() as db:
        food = await FoodService(db).add_food(raw)
        await db.commit()
    await message.answer(f"✅ Added #{food.id} <b>{escape(food.name)}</b>", reply_markup=main_menu_kb())


def _split_id(payload: str, what: str) -> tuple[int, str]:
    parts = payload.split(maxsplit=1)
    if not parts:
        raise InvalidInput(f"{what}: missing id")
    return parse_id(parts[0], what), (parts[1] if len(parts) > 1 else "")


@router.message(Command("food_edit"))
async def cmd_food_edit(message: Message) -> None:
    food_id, rest = _split_id(command_payload(message.text), "food id")
    raw = map_keys(parse_kv(rest), FOOD_KEY_ALIASES)
    async with SessionLocal() as db:
        food = await FoodService(db).update_food(food_id, raw)
        await db.commit()
    await message.answer(f"✅ Updated #{food.id} <b>{escape(food.name)}</b>", reply_markup=main_menu_kb())


@router.message(Command("food_del"))
async def cmd_food_del(message: Message) -> None:
    food_id, _ = _split_id(command_payload(message.text), "food id")
    async with SessionLocal() as db:
        await FoodService(db).delete_food(food_id)
        await db.commit()
    await message.answer(f"🗑 Food #{food_id} deleted", reply_markup=main_menu_kb())


@router.message(Command("date"))
@router.message(F.text.in_({BTN_PREV_DAY, BTN_TODAY, BTN_NEXT_DAY}))
async def cmd_date(message: Message) -> None:
    text = message.text or ""
    arg = {BTN_PREV_DAY: "-1", BTN_TODAY: "today", BTN_NEXT_DAY: "+1"}.get(text)
    if arg is None:
        arg = command_payload(text)
    d = parse_date_arg(arg, current=_selected(message), today=_today())
    _selected_dates[message.chat.id] = d
    await message.answer(f"📅 Selected date: <b>{d.isoformat()}</b>", reply_markup=main_menu_kb())


@router.message(Command("log"))
async def cmd_log(message: Message) -> None:
    parts = command_payload(message.text).split()
    if len(parts) != 3:
        raise InvalidInput("Usage: /log <meal> <food id> <quantity>, e.g. /log lunch 12 150")
    meal, food_ref, quantity = parts
    date = _selected(message)
    async with SessionLocal() as db:
        log = await FoodService(db).log_food(date=date, meal=meal, food_id=parse_id(food_ref, "food id"), quantity=quantity)
        await db.commit()
    await message.answer(
        f"✅ [{log.id}] {escape(log.food_name)} {log.quantity:g} → {log.meal} on {date.isoformat()}: "
        f"{log.calories:g} kcal, P {log.protein_g:g} / C {log.carbs_g:g} / F {log.fat_g:g}",
        reply_markup=main_menu_kb(),
    )


@router.message(Command("log_del"))
async def cmd_log_del(message: Message) -> None:
    log_id, _ = _split_id(command_payload(message.text), "log id")
    async with SessionLocal() as db:
        await FoodService(db).delete_log(log_id)
        await db.commit()
    await message.answer(f"🗑 Log entry #{log_id} deleted", reply_markup=main_menu_kb())


@router.message(Command("day"))
@router.message(F.text == BTN_DAY)
async def cmd_day(message: Message) -> None:
    date = _selected(message)
    async with SessionLocal() as db:
        svc = ProfileService(db)
        profile = await svc.get_profile()
        targets = svc.current_targets(profile)
        logs = await FoodService(db).logs_for(date)
        await db.commit()
    progress = day_progress(daily_totals(logs), targets)
    await message.answer(day_summary(date, group_by_meal(logs), progress), reply_markup=main_menu_kb())


@router.message(Command("workout"))
async def cmd_workout(message: Message) -> None:
    form = map_keys(parse_kv(command_payload(message.text)), WORKOUT_KEY_ALIASES)
    date = _selected(message)
    async with SessionLocal() as db:
        log = await WorkoutService(db).log_workout(date=date, form=form)
        await db.commit()
    await message.answer(
        f"✅ [{log.id}] <b>{escape(log.name)}</b> logged on {date.isoformat()}",
        reply_markup=main_menu_kb(),
    )


@router.message(Command("workouts"))
@router.message(F.text == BTN_WORKOUTS)
async def cmd_workouts(message: Message) -> None:
    date = _selected(message)
    async with SessionLocal() as db:
        logs = await WorkoutService(db).for_date(date)
    await message.answer(workouts_list(date, logs, strength_volume(logs)), reply_markup=main_menu_kb())


@router.message(Command("workout_del"))
async def cmd_workout_del(message: Message) -> None:
    log_id, _ = _split_id(command_payload(message.text), "workout id")
    async with SessionLocal() as db:
        await WorkoutService(db).delete(log_id)
        await db.commit()
    await message.answer(f"🗑 Workout #{log_id} deleted", reply_markup=main_menu_kb())


async def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN is not set")
    await init_db(engine, SessionLocal, seed=settings.seed_sample_foods)
    bot = Bot(settings.bot_token, default=DefaultBotProperties(parse_mode="HTML"))
    dp = Dispatcher()
    dp.include_router(router)
    logger.info("starting polling")
    await dp.start_polling(bot)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
