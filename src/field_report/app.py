"""Interactive CLI application."""
import logging
import webbrowser
from datetime import date

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from field_report.aggregate import is_nearing_deadline
from field_report.assistant import Assistant
from field_report.config import Settings, load_settings
from field_report.errors import ImageTooLargeError, MissingContactError
from field_report.journal import Journal
from field_report.models import ActivityKind, ServiceType
from field_report.periods import month_year_label, parse_record_date
from field_report.report import build_message, share_url
from field_report.store import SqliteStore
from field_report.timecalc import format_time

console = Console()
logger = logging.getLogger(__name__)

EXTRA_LABELS = {
    ActivityKind.LDC: "LDC (construção)",
    ActivityKind.ASSEMBLY_HALL: "Salão de Assembleias",
}


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def show_welcome():
    console.print(Panel(
        f"[bold]Meu Relatório[/bold]\n[dim]{month_year_label()}[/dim]",
        title="Bem-vindo", border_style="blue",
    ))


def show_reminder():
    console.print(Panel(
        "[bold]Quase lá! ✨[/bold]\nHora de consolidar seu belo serviço deste mês.",
        border_style="magenta",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("log", "Record today's field service"),
        ("history", "This month's entries"),
        ("extras", "Credit activities (LDC, assembly hall)"),
        ("report", "Monthly totals, goal and trend"),
        ("insights", "Motivational summary of the month"),
        ("send", "Send the report on WhatsApp"),
        ("settings", "Name, number, service type, goal, images"),
        ("reset", "Erase all data"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def ask_non_negative(prompt: str, default: int = 0) -> int:
    while True:
        value = IntPrompt.ask(prompt, default=default)
        if value >= 0:
            return value
        console.print("[red]Please enter a value of zero or more.[/red]")


def ask_date(prompt: str) -> str:
    while True:
        raw = Prompt.ask(prompt, default=date.today().isoformat()).strip()
        if parse_record_date(raw) is not None:
            return raw
        console.print("[red]Use the format YYYY-MM-DD.[/red]")


def cmd_log(journal: Journal, assistant: Assistant):
    console.print("\n[bold]Novo Registro[/bold]")
    entry_date = ask_date("Date")
    hours = ask_non_negative("Hours", default=1)
    minutes = ask_non_negative("Minutes", default=0)
    studies = ask_non_negative("Bible studies", default=0)
    notes = Prompt.ask("Notes", default="").strip()
    if notes and assistant.enabled and Confirm.ask("Refine the note with AI?", default=False):
        with console.status("Refining note..."):
            refined = assistant.refine_note(notes)
        if refined:
            console.print(Panel(refined, title="Refined note", border_style="cyan"))
            if Confirm.ask("Use the refined note?", default=True):
                notes = refined
        else:
            console.print("[dim]No suggestion available, keeping your note.[/dim]")
    entry = journal.add_entry(hours, minutes, studies, notes or None, entry_date)
    console.print(f"[green]Saved {format_time(entry.hours, entry.minutes)} on {entry_date}.[/green]")


def cmd_history(journal: Journal):
    entries = journal.history()
    if not entries:
        console.print("[yellow]No entries this month yet.[/yellow]")
        return
    table = Table(title=f"Histórico Mensal – {month_year_label()}")
    table.add_column("#", justify="right")
    table.add_column("Day", justify="right")
    table.add_column("Time")
    table.add_column("Studies", justify="right")
    table.add_column("Notes", style="dim")
    for i, e in enumerate(entries, 1):
        day = parse_record_date(e.date)
        table.add_row(
            str(i),
            str(day.day) if day else "?",
            format_time(e.hours, e.minutes),
            str(e.bible_studies),
            e.notes or "",
        )
    console.print(table)

    choice = Prompt.ask("Entry number to delete (Enter to go back)", default="").strip()
    if not choice:
        return
    if not choice.isdigit() or not 1 <= int(choice) <= len(entries):
        console.print("[red]No such entry.[/red]")
        return
    target = entries[int(choice) - 1]
    if Confirm.ask("Deseja excluir este registro?", default=False):
        journal.delete_entry(target.id)
        console.print("[green]Entry deleted.[/green]")


def cmd_extras(journal: Journal):
    extras = journal.extras_history()
    if extras:
        table = Table(title="Atividades Extras")
        table.add_column("#", justify="right")
        table.add_column("Date")
        table.add_column("Activity")
        table.add_column("Time")
        for i, x in enumerate(extras, 1):
            table.add_row(str(i), x.date[:10], EXTRA_LABELS[x.type], format_time(x.hours, x.minutes))
        console.print(table)
    else:
        console.print("[dim]No credit activities this month.[/dim]")

    action = Prompt.ask("Action", choices=["add", "delete", "back"], default="back")
    if action == "add":
        kind = Prompt.ask("Activity", choices=["ldc", "assembly"], default="ldc")
        activity_date = ask_date("Date")
        hours = ask_non_negative("Hours", default=1)
        minutes = ask_non_negative("Minutes", default=0)
        journal.add_extra(
            ActivityKind.LDC if kind == "ldc" else ActivityKind.ASSEMBLY_HALL,
            hours, minutes, activity_date,
        )
        console.print("[green]Credit activity saved.[/green]")
    elif action == "delete" and extras:
        index = IntPrompt.ask("Activity number", choices=[str(i) for i in range(1, len(extras) + 1)])
        if Confirm.ask("Delete this activity?", default=False):
            journal.delete_extra(extras[index - 1].id)
            console.print("[green]Activity deleted.[/green]")


def cmd_report(journal: Journal):
    summary = journal.summary()
    field_time = summary.field_time
    credit_time = summary.credit_time

    console.print(Panel(
        f"[bold]{month_year_label().upper()}[/bold]",
        title="Meu Relatório", border_style="blue",
    ))
    console.print(
        f"\n  Horas campo: [bold]{format_time(field_time.hours, field_time.minutes)}[/bold]  |  "
        f"Estudos: [bold]{summary.studies}[/bold]  |  "
        f"Créditos: [bold]{format_time(credit_time.hours, credit_time.minutes)}[/bold]"
    )

    filled = int(summary.progress * 20)
    bar = f"[magenta]{'█' * filled}{'░' * (20 - filled)}[/magenta]"
    goal = f"{summary.goal:g}"
    console.print(f"\n  Meta de Horas: [bold]{field_time.hours} / {goal}h[/bold] {bar}\n")

    table = Table(title="Desempenho Trimestral")
    table.add_column("Month")
    table.add_column("Hours", justify="right")
    table.add_column("")
    for point in summary.trend:
        table.add_row(point.label, f"{point.display_hours}h", "█" * max(1, round(point.height * 20)))
    console.print(table)


def cmd_insights(journal: Journal, assistant: Assistant):
    if not assistant.enabled:
        console.print("[yellow]Set GEMINI_API_KEY to enable insights.[/yellow]")
        return
    with console.status("Thinking about your month..."):
        text = assistant.monthly_insights(journal.summary(), journal.month_notes())
    if text:
        console.print(Panel(text, title="Insights", border_style="cyan"))
    else:
        console.print("[dim]No insight produced this time.[/dim]")


def cmd_send(journal: Journal):
    message = build_message(journal.profile, journal.summary())
    try:
        url = share_url(journal.profile, message)
    except MissingContactError:
        console.print("[yellow]Por favor, defina um número de WhatsApp nas configurações.[/yellow]")
        cmd_settings(journal)
        return
    console.print(Panel(message, title="Report", border_style="green"))
    webbrowser.open(url)
    console.print("[green]Opened WhatsApp.[/green]")


def cmd_settings(journal: Journal):
    profile = journal.profile
    console.print(
        f"\n  Name: [cyan]{profile.name or '-'}[/cyan]  |  WhatsApp: [cyan]{profile.whatsapp_number or '-'}[/cyan]\n"
        f"  Service: [cyan]{profile.service_type.value}[/cyan]  |  Goal: [cyan]{profile.monthly_goal:g}h[/cyan]"
    )
    action = Prompt.ask(
        "Change",
        choices=["name", "whatsapp", "service", "goal", "picture", "cover", "back"],
        default="back",
    )
    if action == "name":
        journal.update_profile(name=Prompt.ask("Your name", default=profile.name).strip())
    elif action == "whatsapp":
        journal.update_profile(whatsapp_number=Prompt.ask("WhatsApp number", default=profile.whatsapp_number).strip())
    elif action == "service":
        kind = Prompt.ask("Service type", choices=["auxiliary", "regular"], default="auxiliary")
        journal.choose_service_type(ServiceType.REGULAR if kind == "regular" else ServiceType.AUXILIARY)
    elif action == "goal":
        goal = IntPrompt.ask("Monthly goal (hours)", default=int(profile.monthly_goal))
        if goal <= 0:
            console.print("[red]The goal must be positive.[/red]")
            return
        journal.update_profile(monthly_goal=goal)
    elif action in ("picture", "cover"):
        set_image(journal, "profile_picture" if action == "picture" else "cover_photo")
        return
    else:
        return
    console.print("[green]Settings saved.[/green]")


def set_image(journal: Journal, field: str):
    path = Prompt.ask("Image file (or 'remove')").strip()
    if path == "remove":
        if field == "profile_picture":
            journal.clear_profile_picture()
        else:
            journal.restore_default_cover()
        console.print("[green]Image removed.[/green]")
        return
    try:
        journal.set_image(field, path)
    except ImageTooLargeError:
        console.print("[red]A imagem é muito grande. Escolha uma de até 2MB.[/red]")
        return
    except FileNotFoundError:
        console.print(f"[red]File not found: {path}[/red]")
        return
    console.print("[green]Image saved.[/green]")


def cmd_reset(journal: Journal):
    if Confirm.ask("Excluir todos os registros permanentemente?", default=False):
        journal.reset()
        console.print("[green]All data erased.[/green]")


def main(settings: Settings | None = None):
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    journal = Journal(SqliteStore(settings.database_path))
    assistant = Assistant.from_settings(settings)
    # Evaluated once per session.
    nearing_deadline = is_nearing_deadline()

    show_welcome()

    while True:
        if nearing_deadline:
            show_reminder()
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="log").strip().lower()
        try:
            if choice == "log":
                cmd_log(journal, assistant)
            elif choice == "history":
                cmd_history(journal)
            elif choice == "extras":
                cmd_extras(journal)
            elif choice == "report":
                cmd_report(journal)
            elif choice == "insights":
                cmd_insights(journal, assistant)
            elif choice == "send":
                cmd_send(journal)
            elif choice == "settings":
                cmd_settings(journal)
            elif choice == "reset":
                cmd_reset(journal)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Até logo![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
