from __future__ import annotations

import math
from dataclasses import dataclass

from brewguide.schemas.recipe import BrewMethod, RecipeStep, RoastType
from brewguide.services import brew_tables as tables
from brewguide.services.brew_math import fit_durations, round_int


@dataclass
class _StepDraft:
    id: str
    title: str
    details: str
    duration_seconds: int = 0
    is_timed: bool = True
    at_end: bool = False


def _untimed(step_id: str, title: str, details: str, *, at_end: bool = False) -> _StepDraft:
    return _StepDraft(id=step_id, title=title, details=details, is_timed=False, at_end=at_end)


def build_steps(
    *,
    brew_method: BrewMethod | None,
    roast_type: RoastType,
    coffee_grams: float,
    total_water_ml: int,
    total_brew_time_seconds: int,
) -> tuple[RecipeStep, ...]:
    if brew_method == BrewMethod.POUR_OVER:
        drafts = _pour_over_drafts(coffee_grams, total_water_ml, total_brew_time_seconds, roast_type)
        final_minimum = tables.POUR_OVER_MIN_DRAWDOWN_SECONDS
    elif brew_method == BrewMethod.AEROPRESS:
        drafts = _aeropress_drafts(coffee_grams, total_water_ml, total_brew_time_seconds)
        final_minimum = tables.AEROPRESS_MIN_PLUNGE_SECONDS
    elif brew_method == BrewMethod.FRENCH_PRESS:
        drafts = _french_press_drafts(total_water_ml, total_brew_time_seconds)
        final_minimum = tables.FRENCH_PRESS_MIN_PLUNGE_SECONDS
    else:
        return (
            RecipeStep(
                id="error",
                title="Error",
                details="Brew method not supported for step generation.",
                start_time_seconds=0,
                duration_seconds=0,
                is_timed=False,
            ),
        )

    _close_timeline(drafts, total_brew_time_seconds, final_minimum)
    return _lay_out(drafts, total_brew_time_seconds)


def _close_timeline(drafts: list[_StepDraft], total: int, final_minimum: int) -> None:
    # The final timed step absorbs the slack; if its floor overruns, every timed step is scaled.
    timed = [draft for draft in drafts if draft.is_timed]
    if not timed:
        return

    final = timed[-1]
    earlier = sum(draft.duration_seconds for draft in timed[:-1])
    final.duration_seconds = max(final_minimum, total - earlier)

    if earlier + final.duration_seconds > total:
        fitted = fit_durations([draft.duration_seconds for draft in timed], total)
        for draft, duration in zip(timed, fitted):
            draft.duration_seconds = duration


def _lay_out(drafts: list[_StepDraft], total: int) -> tuple[RecipeStep, ...]:
    steps: list[RecipeStep] = []
    cursor = 0
    for draft in drafts:
        start = total if draft.at_end else cursor
        steps.append(
            RecipeStep(
                id=draft.id,
                title=draft.title,
                details=draft.details.format(duration=draft.duration_seconds),
                start_time_seconds=start,
                duration_seconds=draft.duration_seconds,
                is_timed=draft.is_timed,
            )
        )
        if draft.is_timed:
            cursor += draft.duration_seconds
    return tuple(steps)


def _pour_over_drafts(
    coffee_grams: float,
    total_water_ml: int,
    total_brew_time_seconds: int,
    roast_type: RoastType,
) -> list[_StepDraft]:
    drafts = [
        _untimed(
            "pourover-prepare",
            "1. Prepare",
            "Rinse filter with hot water, discard rinse water. Add coffee grounds to dripper, "
            "level the bed, and tare your scale.",
        )
    ]
    now = 0

    bloom_water = round_int(coffee_grams * tables.POUR_OVER_BLOOM_COFFEE_RATIO)
    drafts.append(
        _StepDraft(
            id="pourover-bloom",
            title="2. Bloom Pour",
            details=f"Pour {bloom_water}mL of water evenly to saturate all grounds. Start your main timer.",
            duration_seconds=tables.POUR_OVER_BLOOM_POUR_SECONDS,
        )
    )
    now += tables.POUR_OVER_BLOOM_POUR_SECONDS

    bloom_wait = tables.POUR_OVER_BLOOM_WAIT_SECONDS
    if roast_type in tables.DARK_ROASTS:
        bloom_wait = tables.POUR_OVER_DARK_BLOOM_WAIT_SECONDS
    drafts.append(
        _StepDraft(
            id="pourover-bloom-wait",
            title="3. Wait for Bloom",
            details="Allow coffee to bloom for {duration} seconds. Look for CO2 bubbles escaping.",
            duration_seconds=bloom_wait,
        )
    )
    now += bloom_wait

    pours = tables.POUR_OVER_MAIN_POURS
    water_per_pour = round_int((total_water_ml - bloom_water) / pours)
    phase = max(tables.POUR_OVER_MIN_PHASE_SECONDS, math.floor((total_brew_time_seconds - now) / (pours + 0.5)))
    pour_duration = round_int(phase * tables.POUR_OVER_POUR_SHARE)
    wait_duration = round_int(phase * tables.POUR_OVER_WAIT_SHARE)

    poured = bloom_water
    for index in range(pours):
        is_last = index == pours - 1
        if not is_last and now + pour_duration > total_brew_time_seconds:
            break
        amount = total_water_ml - poured if is_last else water_per_pour
        poured += amount
        drafts.append(
            _StepDraft(
                id=f"pourover-mainpour-{index + 1}",
                title=f"4. Main Pour {index + 1}/{pours}",
                details=(
                    f"Slowly pour {amount}mL of water in a circular motion, avoiding the edges. "
                    f"Aim to reach {poured}mL total water."
                ),
                duration_seconds=pour_duration,
            )
        )
        now += pour_duration

        if not is_last and now + wait_duration < total_brew_time_seconds:
            drafts.append(
                _StepDraft(
                    id=f"pourover-waitpour-{index + 1}",
                    title="Wait Briefly",
                    details="Allow water to partially draw down before next pour.",
                    duration_seconds=wait_duration,
                )
            )
            now += wait_duration

    drafts.append(
        _StepDraft(
            id="pourover-drawdown",
            title=f"{2 + 2 * pours}. Final Drawdown",
            details=(
                "Allow all water to drip through the coffee bed. "
                "This should complete around your target brew time."
            ),
            duration_seconds=max(tables.POUR_OVER_MIN_DRAWDOWN_SECONDS, total_brew_time_seconds - now),
        )
    )
    drafts.append(
        _untimed(
            "pourover-serve",
            "Serve & Enjoy",
            "Once dripping slows to every few seconds, remove dripper. Swirl, serve, and enjoy your coffee!",
            at_end=True,
        )
    )
    return drafts


def _aeropress_drafts(coffee_grams: float, total_water_ml: int, total_brew_time_seconds: int) -> list[_StepDraft]:
    plunge_reserve = tables.AEROPRESS_PLUNGE_SECONDS + tables.AEROPRESS_PLUNGE_BUFFER_SECONDS
    drafts = [
        _untimed(
            "aeropress-prepare",
            "1. Prepare (Inverted)",
            "Assemble AeroPress in inverted position (numbers upside down). Place on a sturdy mug or server. "
            "Rinse paper filter in cap with hot water and set aside.",
        )
    ]

    bloom_water = round_int(coffee_grams * tables.AEROPRESS_BLOOM_COFFEE_RATIO)
    drafts.append(
        _StepDraft(
            id="aeropress-addcoffee",
            title="2. Add Coffee & Bloom Water",
            details=(
                f"Add {coffee_grams:.1f}g of coffee. Pour {bloom_water}mL of water. Start timer. "
                "Stir gently for 10s to ensure all grounds are wet."
            ),
            duration_seconds=tables.AEROPRESS_ADD_COFFEE_SECONDS,
        )
    )
    now = tables.AEROPRESS_ADD_COFFEE_SECONDS

    bloom_wait = min(tables.AEROPRESS_BLOOM_WAIT_SECONDS, total_brew_time_seconds - now - plunge_reserve)
    if bloom_wait > 0:
        drafts.append(
            _StepDraft(
                id="aeropress-bloomwait",
                title="3. Wait for Bloom",
                details="Allow coffee to bloom and saturate for {duration} seconds.",
                duration_seconds=bloom_wait,
            )
        )
        now += bloom_wait

    drafts.append(
        _StepDraft(
            id="aeropress-addwater",
            title="4. Add Remaining Water",
            details=f"Add remaining {total_water_ml - bloom_water}mL of water, filling to desired level.",
            duration_seconds=tables.AEROPRESS_ADD_WATER_SECONDS,
        )
    )
    now += tables.AEROPRESS_ADD_WATER_SECONDS

    steep = max(tables.AEROPRESS_MIN_STEEP_SECONDS, total_brew_time_seconds - now - plunge_reserve)
    drafts.append(
        _StepDraft(
            id="aeropress-steep",
            title="5. Steep",
            details="Wait for {duration} seconds for coffee to steep.",
            duration_seconds=steep,
        )
    )
    now += steep

    drafts.append(
        _StepDraft(
            id="aeropress-prepareplunge",
            title="6. Prepare to Plunge",
            details="Secure filter cap. Carefully flip AeroPress onto your mug. Position for plunging.",
            duration_seconds=tables.AEROPRESS_PREPARE_PLUNGE_SECONDS,
        )
    )
    now += tables.AEROPRESS_PREPARE_PLUNGE_SECONDS

    drafts.append(
        _StepDraft(
            id="aeropress-plunge",
            title="7. Plunge",
            details="Slowly press plunger downwards for about {duration} seconds. Stop if you hear a hiss.",
            duration_seconds=min(
                tables.AEROPRESS_PLUNGE_SECONDS,
                max(tables.AEROPRESS_MIN_PLUNGE_SECONDS, total_brew_time_seconds - now),
            ),
        )
    )
    drafts.append(
        _untimed(
            "aeropress-serve",
            "8. Serve",
            "Your coffee concentrate is ready. Dilute with hot water to taste if desired. Enjoy!",
            at_end=True,
        )
    )
    return drafts


def _french_press_drafts(total_water_ml: int, total_brew_time_seconds: int) -> list[_StepDraft]:
    plunge = tables.FRENCH_PRESS_PLUNGE_SECONDS
    drafts = [
        _untimed(
            "frenchpress-prepare",
            "1. Preheat & Add Coffee",
            "Preheat French Press vessel with hot water, then discard. Add coffee grounds.",
        ),
        _StepDraft(
            id="frenchpress-addwater",
            title="2. Add Water",
            details=(
                f"Pour {total_water_ml}mL of hot water over grounds, ensuring all are saturated. "
                "Start timer. Place lid on top, plunger up."
            ),
            duration_seconds=tables.FRENCH_PRESS_ADD_WATER_SECONDS,
        ),
    ]
    now = tables.FRENCH_PRESS_ADD_WATER_SECONDS

    left_before_plunge = total_brew_time_seconds - now - plunge
    initial_steep = min(
        tables.FRENCH_PRESS_CRUST_BREAK_WAIT_SECONDS,
        max(tables.FRENCH_PRESS_MIN_INITIAL_STEEP_SECONDS, left_before_plunge - 30),
    )
    drafts.append(
        _StepDraft(
            id="frenchpress-initialsteep",
            title="3. Initial Steep",
            details="Let coffee steep for {duration} seconds.",
            duration_seconds=initial_steep,
        )
    )
    now += initial_steep

    drafts.append(
        _StepDraft(
            id="frenchpress-breakcrust",
            title="4. Break Crust",
            details="Gently stir the top layer (the crust) to allow grounds to sink.",
            duration_seconds=tables.FRENCH_PRESS_BREAK_CRUST_SECONDS,
        )
    )
    now += tables.FRENCH_PRESS_BREAK_CRUST_SECONDS

    continue_steep = max(tables.FRENCH_PRESS_MIN_CONTINUE_STEEP_SECONDS, total_brew_time_seconds - now - plunge)
    drafts.append(
        _StepDraft(
            id="frenchpress-continuesteep",
            title="5. Continue Steeping",
            details="Allow coffee to continue steeping for {duration} seconds.",
            duration_seconds=continue_steep,
        )
    )
    now += continue_steep

    drafts.append(
        _StepDraft(
            id="frenchpress-press",
            title="6. Press",
            details="Slowly and steadily press the plunger all the way down over about {duration} seconds.",
            duration_seconds=min(plunge, max(tables.FRENCH_PRESS_MIN_PLUNGE_SECONDS, total_brew_time_seconds - now)),
        )
    )
    drafts.append(
        _untimed(
            "frenchpress-serve",
            "7. Serve Immediately",
            "Pour coffee into mugs immediately to prevent over-extraction. Enjoy!",
            at_end=True,
        )
    )
    return drafts
