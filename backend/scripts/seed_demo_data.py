from datetime import date
import random

from reflection.core.config import Settings
from reflection.core.week_utils import week_and_year, weeks_in_year
from reflection.db import Store
from reflection.repositories.check_ins import CheckInRepository
from reflection.repositories.goals import GoalRepository
from reflection.repositories.profiles import UserProfileRepository

DEMO_UID = "demo-user"
DEMO_EMAIL = "demo@example.com"

DEMO_GOALS = [
    ("Run a marathon", "Build up to 26.2 by autumn."),
    ("Read 24 books", "Two a month, mix fiction and non-fiction."),
    ("Learn Spanish", "Daily practice, one conversation class a week."),
]

REFLECTIONS = [
    "Solid week, stuck to the plan.",
    "Busy at work, only managed a little.",
    "Good progress, felt motivated.",
    "",  # rated but no reflection written
]


def clear_demo_user(goals: GoalRepository) -> None:
    """Delete the demo user's goals (and their check-ins) so we can reseed cleanly."""
    for goal_id in goals.get_goal_ids_for_user(DEMO_UID):
        goals.delete_goal(goal_id)


def seed_demo_data(store: Store, year: int | None = None, weeks: int = 12, rng: random.Random | None = None) -> dict:
    """Insert demo goals for `year` and check-ins for its first `weeks` weeks."""
    rng = rng or random.Random()
    today = date.today()
    year = year or today.year
    # Skip future weeks of the current year
    last_week = weeks_in_year(year)
    this_year, this_week = week_and_year(today)
    if year == this_year:
        last_week = min(last_week, this_week)
    elif year > this_year:
        last_week = 0
    weeks = min(weeks, last_week)

    goals = GoalRepository(store)
    check_ins = CheckInRepository(store, goals)
    profiles = UserProfileRepository(store)

    clear_demo_user(goals)
    if profiles.get_user_profile(DEMO_UID) is None:
        profiles.create_user_profile(DEMO_UID, DEMO_EMAIL, "Demo User")

    created = [goals.add_goal(DEMO_UID, title=t, year=year, description=d) for t, d in DEMO_GOALS]
    saved = 0
    for week in range(1, weeks + 1):
        for goal in created:
            # Leave some weeks empty so the timeline has gaps
            if rng.random() < 0.2:
                continue
            check_ins.save_or_update_check_in(
                goal.id,
                week,
                year,
                rng.choice(REFLECTIONS),
                rng.choice([None, 2, 3, 4, 5]),
            )
            saved += 1
    return {"goals": len(created), "check_ins": saved}


if __name__ == "__main__":
    settings = Settings()
    store = Store(settings.database_url)
    store.create_all()
    counts = seed_demo_data(store)
    print(f"Seeded {counts['goals']} demo goals and {counts['check_ins']} check-ins")
