"""Interactive CLI application."""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from week_planner.assistant import Assistant
from week_planner.calendar_sync import (
    DEMO_ACCOUNT_SUFFIX, DemoCalendarClient, GoogleCalendarClient,
    build_tactic_event, is_demo_account,
)
from week_planner.config import load_settings
from week_planner.controller import PlannerController
from week_planner.cycle import (
    complete_week, ensure_current_week_exists, get_current_week,
    is_cycle_complete, toggle_current_week_tactic,
)
from week_planner.dashboard import get_cycle_stats, get_weekly_scores
from week_planner.db import init_db
from week_planner.exceptions import PlannerError
from week_planner.log import setup_logging
from week_planner.models import CYCLE_WEEKS, TaskStatus
from week_planner.mutations import (
    add_goal, add_suggested_goals, add_suggested_tactics, add_tactic,
    connect_calendar, delete_goal, delete_tactic, disconnect_calendar,
    set_calendar_credentials, set_vision, update_goal, update_tactic,
)
from week_planner.scoring import TARGET_SCORE, compute_score, count_completed, score_color, score_label

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class Services:
    assistant: Assistant
    calendar: Optional[Union[GoogleCalendarClient, DemoCalendarClient]] = None


def show_welcome():
    console.print(Panel(
        "[bold]12 Week Year[/bold]\n[dim]Vision, goals and weekly execution[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("dashboard", "Scores and progress"),
        ("vision", "Edit your vision"),
        ("goals", "Plan goals and tactics"),
        ("execute", "This week's tactics"),
        ("review", "Score and close the week"),
        ("weeks", "Week history"),
        ("calendar", "Calendar connection"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def score_bar(score: float) -> str:
    color = score_color(score)
    filled = int(score / 5)
    return f"[{color}]{'█' * filled}{'░' * (20 - filled)}[/{color}]"


def pick_index(label: str, count: int) -> Optional[int]:
    """Ask for a 1-based item number; blank input cancels."""
    if count == 0:
        return None
    answer = Prompt.ask(f"{label} (1-{count}, blank to cancel)", default="").strip()
    if not answer:
        return None
    if not answer.isdigit() or not 1 <= int(answer) <= count:
        console.print("[red]Invalid selection.[/red]")
        return None
    return int(answer) - 1


def show_goals(ctl: PlannerController):
    if not ctl.state.goals:
        console.print("[yellow]No goals yet. Use 'add' or 'suggest' to create some.[/yellow]")
        return
    for i, goal in enumerate(ctl.state.goals, 1):
        console.print(f"\n[bold cyan]{i}. {goal.title or '(untitled goal)'}[/bold cyan]")
        if goal.description:
            console.print(f"   [dim]{goal.description}[/dim]")
        for j, t in enumerate(goal.tactics, 1):
            console.print(f"   {i}.{j} {t.title or '(untitled tactic)'} [dim]{t.duration_minutes} min[/dim]")


def cmd_dashboard(ctl: PlannerController):
    state = ctl.state
    stats = get_cycle_stats(state)
    header = f"Week {state.current_week} of {CYCLE_WEEKS}"
    if stats["cycle_complete"]:
        header += "  [green]Cycle complete[/green]"
    console.print(Panel(f"[bold]{header}[/bold]", title="12 Week Year Dashboard", border_style="blue"))

    avg = stats["average_score"]
    console.print(f"\n  Average execution: [bold]{avg}%[/bold] {score_bar(avg)} "
                  f"[{score_color(avg)}]{score_label(avg)}[/{score_color(avg)}]\n")

    table = Table(title="Weekly Scores")
    table.add_column("Week", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("")
    for row in get_weekly_scores(state):
        marker = " ←" if row["week"] == state.current_week else ""
        table.add_row(row["label"] + marker, f"{row['score']}%", score_bar(row["score"]))
    console.print(table)

    console.print(f"\n  Goals: [bold]{stats['goals']}[/bold]  |  "
                  f"Tactics: [bold]{stats['tactics']}[/bold]  |  "
                  f"Weeks reviewed: [bold]{stats['weeks_reviewed']}[/bold]  |  "
                  f"Pending this week: [bold]{stats['pending_this_week']}[/bold]")
    console.print(Panel(state.vision or "[dim]No vision defined yet. Use 'vision' to set your north star.[/dim]",
                        title="Vision", border_style="magenta"))


def cmd_vision(ctl: PlannerController, services: Services):
    console.print(Panel(ctl.state.vision or "[dim](empty)[/dim]", title="Current Vision"))
    action = Prompt.ask("Action", choices=["edit", "enhance", "back"], default="edit")
    if action == "edit":
        text = Prompt.ask("Your 3-5 year vision", default=ctl.state.vision)
        ctl.apply(set_vision, text.strip())
        console.print("[green]Vision saved.[/green]")
    elif action == "enhance":
        if not ctl.state.vision.strip():
            console.print("[yellow]Write a draft vision first.[/yellow]")
            return
        with console.status("Asking the assistant..."):
            enhanced = services.assistant.enhance_vision(ctl.state.vision)
        console.print(Panel(enhanced, title="Suggested Vision", border_style="green"))
        if Confirm.ask("Use this vision?", default=True):
            ctl.apply(set_vision, enhanced)
            console.print("[green]Vision saved.[/green]")


def _edit_goal(ctl: PlannerController, services: Services, goal_index: int):
    goal = ctl.state.goals[goal_index]
    action = Prompt.ask(
        "Goal action",
        choices=["rename", "add-tactic", "edit-tactic", "delete-tactic", "generate", "back"],
        default="add-tactic",
    )
    if action == "rename":
        title = Prompt.ask("Title", default=goal.title)
        description = Prompt.ask("Description", default=goal.description)
        ctl.apply(update_goal, goal.id, title=title, description=description)
    elif action == "add-tactic":
        title = Prompt.ask("Tactic")
        minutes = IntPrompt.ask("Duration (minutes)", default=60)
        ctl.apply(add_tactic, goal.id, title=title, duration_minutes=max(1, minutes))
    elif action == "edit-tactic":
        idx = pick_index("Tactic", len(goal.tactics))
        if idx is None:
            return
        tactic = goal.tactics[idx]
        title = Prompt.ask("Tactic", default=tactic.title)
        minutes = IntPrompt.ask("Duration (minutes)", default=tactic.duration_minutes)
        ctl.apply(update_tactic, goal.id, tactic.id, title=title, duration_minutes=max(1, minutes))
    elif action == "delete-tactic":
        idx = pick_index("Tactic", len(goal.tactics))
        if idx is None:
            return
        ctl.apply(delete_tactic, goal.id, goal.tactics[idx].id)
    elif action == "generate":
        with console.status("Asking the assistant..."):
            proposals = services.assistant.generate_tactics(goal.title, goal.description)
        if not proposals:
            console.print("[yellow]No tactics suggested.[/yellow]")
            return
        for p in proposals:
            console.print(f"  • {p.title} [dim]{p.duration_minutes} min[/dim]")
        if Confirm.ask("Add these tactics?", default=True):
            ctl.apply(add_suggested_tactics, goal.id, proposals)
            console.print(f"[green]Added {len(proposals)} tactics.[/green]")


def cmd_goals(ctl: PlannerController, services: Services):
    show_goals(ctl)
    action = Prompt.ask("\nAction", choices=["add", "edit", "delete", "suggest", "back"], default="back")
    if action == "add":
        title = Prompt.ask("Goal title")
        description = Prompt.ask("Description", default="")
        ctl.apply(add_goal, title=title, description=description)
        console.print("[green]Goal added.[/green]")
    elif action == "edit":
        idx = pick_index("Goal", len(ctl.state.goals))
        if idx is not None:
            _edit_goal(ctl, services, idx)
    elif action == "delete":
        idx = pick_index("Goal", len(ctl.state.goals))
        if idx is not None and Confirm.ask("Delete this goal and its tactics?", default=False):
            ctl.apply(delete_goal, ctl.state.goals[idx].id)
            console.print("[green]Goal deleted. Past weeks keep their tactics.[/green]")
    elif action == "suggest":
        if not ctl.state.vision.strip():
            console.print("[yellow]Set a vision first so the assistant has something to work from.[/yellow]")
            return
        with console.status("Asking the assistant..."):
            proposals = services.assistant.suggest_goals(ctl.state.vision)
        if not proposals:
            console.print("[yellow]No goals suggested.[/yellow]")
            return
        for p in proposals:
            console.print(f"  • [bold]{p.title}[/bold]\n    [dim]{p.description}[/dim]")
        if Confirm.ask("Add these goals?", default=True):
            ctl.apply(add_suggested_goals, proposals)
            console.print(f"[green]Added {len(proposals)} goals.[/green]")


def push_to_calendar(ctl: PlannerController, services: Services, tactic) -> bool:
    if not ctl.state.is_calendar_connected or services.calendar is None:
        console.print("[yellow]Connect a calendar first (use 'calendar').[/yellow]")
        return False
    event = build_tactic_event(tactic)
    if services.calendar.create_event(event):
        if is_demo_account(ctl.state.connected_email):
            console.print(f"[green][demo] Scheduled \"{tactic.title}\" (nothing written to a real calendar).[/green]")
        else:
            console.print(f"[green]Scheduled \"{tactic.title}\" on your calendar.[/green]")
        return True
    console.print("[red]Could not write to the calendar. Check the connection and credentials.[/red]")
    return False


def show_week(week):
    table = Table(title=f"Week {week.week_number}")
    table.add_column("#", justify="right")
    table.add_column("Tactic")
    table.add_column("Minutes", justify="right")
    table.add_column("Status")
    for i, t in enumerate(week.tactics_snapshot, 1):
        done = t.status == TaskStatus.COMPLETED
        table.add_row(
            str(i),
            t.title,
            str(t.duration_minutes),
            "[green]done[/green]" if done else "[yellow]pending[/yellow]",
        )
    console.print(table)


def cmd_execute(ctl: PlannerController, services: Services):
    ctl.apply(ensure_current_week_exists)
    week = get_current_week(ctl.state)
    if week is None:
        console.print("[yellow]No tactics to execute. Plan at least one goal first.[/yellow]")
        return
    while True:
        week = get_current_week(ctl.state)
        show_week(week)
        if not week.tactics_snapshot:
            console.print("[dim]This week has no tactics.[/dim]")
            return
        action = Prompt.ask("Action", choices=["toggle", "schedule", "back"], default="back")
        if action == "back":
            return
        idx = pick_index("Tactic", len(week.tactics_snapshot))
        if idx is None:
            continue
        tactic = week.tactics_snapshot[idx]
        if action == "toggle":
            ctl.apply(toggle_current_week_tactic, tactic.id)
        elif tactic.status == TaskStatus.COMPLETED:
            console.print("[dim]Already done, nothing to schedule.[/dim]")
        else:
            push_to_calendar(ctl, services, tactic)


def cmd_review(ctl: PlannerController):
    week = get_current_week(ctl.state)
    if week is None:
        console.print("[yellow]No data for this week yet. Open 'execute' first.[/yellow]")
        return
    if is_cycle_complete(ctl.state):
        console.print("[green]The 12-week cycle is complete. Well done![/green]")
        return
    total = len(week.tactics_snapshot)
    score = compute_score(week.tactics_snapshot)
    color = score_color(score)
    console.print(Panel(
        f"[bold {color}]{score}%[/bold {color}]\n"
        f"{count_completed(week.tactics_snapshot)} of {total} tactics completed",
        title=f"Week {week.week_number} Review",
    ))
    if score < TARGET_SCORE:
        console.print(f"[yellow]Below the {TARGET_SCORE}% target. Revisit your time blocks.[/yellow]")
    else:
        console.print("[green]Great work, you're on track.[/green]")
    show_week(week)
    reflection = Prompt.ask("Reflection on this week", default=week.reflection)
    if not Confirm.ask(f"Complete week {week.week_number}?", default=True):
        return
    ctl.apply(complete_week, reflection)
    console.print(f"[green]Week {week.week_number} complete! Your score: {score}%[/green]")


def cmd_weeks(ctl: PlannerController):
    if not ctl.state.weeks:
        console.print("[yellow]No weeks recorded yet.[/yellow]")
        return
    table = Table(title="12 Week Cycle")
    table.add_column("Week", justify="right")
    table.add_column("Started")
    table.add_column("Tactics", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Status")
    table.add_column("Reflection")
    for w in sorted(ctl.state.weeks, key=lambda w: w.week_number):
        if w.is_reviewed:
            status = "[green]Reviewed[/green]"
        elif w.week_number == ctl.state.current_week:
            status = "[cyan]Current[/cyan]"
        else:
            status = ""
        table.add_row(
            str(w.week_number),
            w.start_date[:10],
            str(len(w.tactics_snapshot)),
            f"{w.execution_score}%" if w.is_reviewed else "-",
            status,
            w.reflection,
        )
    console.print(table)


def _connect_google(ctl: PlannerController, services: Services, email: Optional[str] = None):
    email = email or Prompt.ask("Google account email")
    token = Prompt.ask("OAuth access token", password=True)
    services.calendar = GoogleCalendarClient(token)
    ctl.apply(connect_calendar, email)
    console.print(f"[green]Connected Google account: {email}[/green]")


def cmd_calendar(ctl: PlannerController, services: Services):
    state = ctl.state
    if state.is_calendar_connected:
        console.print(f"Connected as [bold]{state.connected_email}[/bold]")
        choices = ["disconnect", "back"]
        # Access tokens are not stored, so a restart leaves the account without a client.
        if services.calendar is None:
            console.print("[yellow]This session has no access token yet; reconnect to schedule tactics.[/yellow]")
            choices.insert(0, "reconnect")
        action = Prompt.ask("Action", choices=choices, default=choices[0])
        if action == "reconnect":
            if is_demo_account(state.connected_email):
                services.calendar = DemoCalendarClient()
                console.print("[green][demo] Reconnected to a simulated calendar.[/green]")
            else:
                _connect_google(ctl, services, email=state.connected_email)
        elif action == "disconnect" and Confirm.ask("Disconnect the calendar?", default=False):
            services.calendar = None
            ctl.apply(disconnect_calendar)
            console.print("[green]Disconnected.[/green]")
        return
    action = Prompt.ask("Action", choices=["connect", "demo", "settings", "back"], default="connect")
    if action == "settings":
        client_id = Prompt.ask("Google client id", default=state.google_client_id or "")
        api_key = Prompt.ask("Google API key", default=state.google_api_key or "")
        ctl.apply(set_calendar_credentials, client_id, api_key)
        console.print("[green]Settings saved. Connect again to use them.[/green]")
    elif action == "demo":
        services.calendar = DemoCalendarClient()
        ctl.apply(connect_calendar, "demo@example.com" + DEMO_ACCOUNT_SUFFIX)
        console.print("[green][demo] Connected to a simulated calendar.[/green]")
    elif action == "connect":
        if not state.google_client_id or not state.google_api_key:
            console.print("[yellow]Add your Google API settings first, or use 'demo'.[/yellow]")
            return
        _connect_google(ctl, services)


def main():
    settings = load_settings()
    setup_logging(settings.log_dir, settings.log_level)
    init_db(settings.db_path)
    ctl = PlannerController(settings.db_path)
    services = Services(assistant=Assistant.from_settings(settings))
    if ctl.state.is_calendar_connected and is_demo_account(ctl.state.connected_email):
        services.calendar = DemoCalendarClient()

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        try:
            if choice == "dashboard":
                cmd_dashboard(ctl)
            elif choice == "vision":
                cmd_vision(ctl, services)
            elif choice == "goals":
                cmd_goals(ctl, services)
            elif choice == "execute":
                cmd_execute(ctl, services)
            elif choice == "review":
                cmd_review(ctl)
            elif choice == "weeks":
                cmd_weeks(ctl)
            elif choice == "calendar":
                cmd_calendar(ctl, services)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Keep executing![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except PlannerError as e:
            console.print(f"[red]{e.user_message()}[/red]")
        except Exception as e:
            logger.exception("Command %r failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
