#!/usr/bin/env python3
"""SkillBridge CLI - operator entry point for the SkillBridge APIs.

Usage:
    # Check both backends
    python main.py health

    # List clients / jobs (page 2, 20 per page)
    python main.py clients --page 2 --page-size 20
    python main.py jobs --empresa Acme

    # Job recommendations for client 7
    python main.py recommend 7 --top-n 3

    # Generate HTML documents
    python main.py cv --data ./perfil.json --output cv.html
    python main.py plan --soft Comunicacao --hard Python --goal "Data Engineer"
"""

import json
import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from clients import (
    CancelToken,
    ClientFilter,
    HTTPStatusError,
    JobFilter,
    RequestAborted,
    SkillBridgeError,
    TransportError,
    get_ai_client,
    get_api_client,
)
from clients.params import format_ptbr_datetime
from config import Settings, settings
from contracts import (
    AIHealth,
    ClienteResponse,
    CvHtmlRequest,
    DemoCvRequest,
    ExplainRequest,
    JobRecommendation,
    JobResponse,
    LoginResponse,
    Perfil,
    PlanRequest,
)


console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger().setLevel(level.upper())


def _handle_errors(func):
    """Report client failures in red and exit non-zero."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RequestAborted as exc:
            console.print(f"[yellow]Aborted:[/yellow] {exc}")
            sys.exit(130)
        except HTTPStatusError as exc:
            console.print(f"[red]Error:[/red] HTTP {exc.status_code} - {exc.detail or exc}")
            sys.exit(1)
        except TransportError as exc:
            console.print(f"[red]Error:[/red] backend unreachable ({exc})")
            sys.exit(1)
        except SkillBridgeError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            sys.exit(1)

    return wrapper


def _read_json_file(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except ValueError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}")
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a JSON object")
    return data


def _emit_html(html: str, output: Optional[str]) -> None:
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(html, encoding="utf-8")
        console.print(f"[bold]Document saved to:[/bold] {out_path} ({len(html):,} characters)")
    else:
        click.echo(html)


def _render_table(title: str, columns: Sequence[str], rows: List[Sequence[Any]]) -> None:
    if not rows:
        console.print(f"[dim]{title}: no data[/dim]")
        return
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*["" if v is None else str(v) for v in row])
    console.print(table)


def _parse_records(model, records: List[Any]) -> List[Any]:
    parsed = []
    for record in records:
        try:
            parsed.append(model.model_validate(record))
        except ValidationError:
            console.print(f"[yellow]Skipping malformed record:[/yellow] {record!r}")
    return parsed


@click.group()
@click.option("--api-base", default=None, help="CRUD API base URL (overrides settings)")
@click.option("--ai-base", default=None, help="AI API base URL (overrides settings)")
@click.option("--token", default=None, help="Bearer token for the CRUD API")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Abort calls still running after this many seconds",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(
    ctx: click.Context,
    api_base: Optional[str],
    ai_base: Optional[str],
    token: Optional[str],
    timeout: Optional[float],
    verbose: bool,
):
    """SkillBridge: clients, jobs, recommendations and AI documents."""
    _configure_logging("DEBUG" if verbose else settings.log_level)

    config: Settings = settings
    api = get_api_client(config)
    ai = get_ai_client(config)
    if api_base:
        api.configure_base(api_base)
    if ai_base:
        ai.configure_base(ai_base)
    if token:
        api.configure_auth(token)

    ctx.obj = {"api": api, "ai": ai, "timeout": timeout, "config": config}
    ctx.call_on_close(api.close)
    ctx.call_on_close(ai.close)


def _cancel_token(ctx: click.Context) -> Optional[CancelToken]:
    timeout = ctx.obj.get("timeout")
    return CancelToken.after(timeout) if timeout else None


def _health_line(label: str, client, body: Any) -> str:
    if not isinstance(body, dict):
        return f"  {label:10} [green]✓ {body or 'ok'}[/green] [dim]{client.base_url}[/dim]"
    try:
        info = AIHealth.model_validate(body)
    except ValidationError:
        info = AIHealth()
    extras = [part for part in (info.model, format_ptbr_datetime(info.timestamp)) if part]
    suffix = f" ({', '.join(extras)})" if extras else ""
    return (
        f"  {label:10} [green]✓ {info.status or 'ok'}{suffix}[/green]"
        f" [dim]{client.base_url}[/dim]"
    )


@cli.command()
@click.pass_context
@_handle_errors
def health(ctx: click.Context):
    """Check both backends; one failing never hides the other."""
    for label, client in (("CRUD API", ctx.obj["api"]), ("AI API", ctx.obj["ai"])):
        try:
            body = client.get_health(cancel=_cancel_token(ctx))
        except RequestAborted:
            raise
        except SkillBridgeError as exc:
            console.print(f"  {label:10} [red]✗ {exc}[/red]")
            continue
        console.print(_health_line(label, client, body))


@cli.command()
@click.option("--email", "-e", required=True, help="Account email")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Account password")
@click.option("--show-token", is_flag=True, help="Print the issued bearer token")
@click.pass_context
@_handle_errors
def login(ctx: click.Context, email: str, password: str, show_token: bool):
    """Authenticate against the CRUD API."""
    api = ctx.obj["api"]
    result = api.login(email, password, cancel=_cancel_token(ctx))
    if not api.token:
        console.print("[red]Login response carried no token[/red]")
        sys.exit(1)
    try:
        cliente = LoginResponse.model_validate(result).cliente if isinstance(result, dict) else None
    except ValidationError:
        cliente = None
    nome = cliente.nome if cliente is not None else None
    console.print(f"[green]Logged in[/green] as {nome or email}")
    if show_token:
        click.echo(api.token)
    else:
        console.print("[dim]Export SKILLBRIDGE_API_TOKEN or pass --token to reuse it.[/dim]")


@cli.command()
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=None, help="Default: settings.default_page_size")
@click.option("--nome", default=None, help="Filter by name")
@click.option("--email", default=None, help="Filter by email")
@click.option("--competencias", default=None, help="Filter by skills")
@click.option("--sort", default=None, help='e.g. "nome,asc"')
@click.pass_context
@_handle_errors
def clients(ctx, page, page_size, nome, email, competencias, sort):
    """List clients."""
    filters = ClientFilter(nome=nome, email=email, competencias=competencias, sort=sort)
    records = ctx.obj["api"].list_clients(
        page,
        page_size or ctx.obj["config"].default_page_size,
        cancel=_cancel_token(ctx),
        filters=filters,
    )
    rows = [
        (c.id, c.nome, c.email, c.profissao_atual, c.competencias)
        for c in _parse_records(ClienteResponse, records)
    ]
    _render_table("Clientes", ["ID", "Nome", "Email", "Profissão", "Competências"], rows)


@cli.command()
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=None, help="Default: settings.default_page_size")
@click.option("--titulo", default=None, help="Filter by title")
@click.option("--empresa", default=None, help="Filter by company")
@click.option("--sort", default=None)
@click.pass_context
@_handle_errors
def jobs(ctx, page, page_size, titulo, empresa, sort):
    """List jobs."""
    filters = JobFilter(titulo=titulo, empresa=empresa, sort=sort)
    records = ctx.obj["api"].list_jobs(
        page,
        page_size or ctx.obj["config"].default_page_size,
        cancel=_cancel_token(ctx),
        filters=filters,
    )
    rows = [
        (j.id, j.titulo, j.empresa, j.requisitos)
        for j in _parse_records(JobResponse, records)
    ]
    _render_table("Jobs", ["ID", "Título", "Empresa", "Requisitos"], rows)


@cli.command()
@click.argument("client_id", type=int)
@click.option("--top-n", type=int, default=None, help="Default: settings.default_top_n")
@click.pass_context
@_handle_errors
def recommend(ctx, client_id: int, top_n: Optional[int]):
    """Recommended jobs for a client."""
    records = ctx.obj["api"].get_recommendations(
        client_id,
        top_n or ctx.obj["config"].default_top_n,
        cancel=_cancel_token(ctx),
    )
    rows = [
        (r.id, r.titulo, r.empresa, f"{r.score:.2f}" if r.score is not None else None)
        for r in _parse_records(JobRecommendation, records)
    ]
    _render_table(f"Recomendações para cliente {client_id}", ["ID", "Título", "Empresa", "Score"], rows)


@cli.command()
@click.option("--data", "data_path", type=click.Path(exists=True, dir_okay=False), required=True,
              help="JSON file with the CV data")
@click.option("--lang", default=None, help="Document language, e.g. pt-BR")
@click.option("--output", "-o", default=None, help="Write the HTML here instead of stdout")
@click.pass_context
@_handle_errors
def cv(ctx, data_path: str, lang: Optional[str], output: Optional[str]):
    """Generate a CV from your data."""
    body = CvHtmlRequest(dados=_read_json_file(data_path), idioma=lang)
    with console.status("Generating CV..."):
        html = ctx.obj["ai"].generate_cv_html(body, cancel=_cancel_token(ctx))
    _emit_html(html, output)


@cli.command("demo-cv")
@click.option("--lang", default=None, help="Document language")
@click.option("--profile-type", default=None, help="Kind of random profile to invent")
@click.option("--output", "-o", default=None)
@click.pass_context
@_handle_errors
def demo_cv(ctx, lang: Optional[str], profile_type: Optional[str], output: Optional[str]):
    """Generate a CV for a random demo profile."""
    body = DemoCvRequest(idioma=lang, tipo_perfil=profile_type)
    with console.status("Generating demo CV..."):
        html = ctx.obj["ai"].generate_demo_cv_html(body, cancel=_cancel_token(ctx))
    _emit_html(html, output)


@cli.command()
@click.option("--soft", multiple=True, help="Soft skill (repeatable)")
@click.option("--hard", multiple=True, help="Hard skill (repeatable)")
@click.option("--goal", default=None, help="Career objective")
@click.option("--hours", type=float, default=None, help="Weekly hours available")
@click.option("--lang", default=None)
@click.option("--output", "-o", default=None)
@click.pass_context
@_handle_errors
def plan(ctx, soft, hard, goal, hours, lang, output):
    """Generate a reskilling plan."""
    if not soft and not hard:
        raise click.UsageError("Provide at least one --soft or --hard skill")
    perfil = Perfil(
        soft_skills=list(soft),
        hard_skills=list(hard),
        objetivo=goal,
        disponibilidade_semanal_horas=hours,
    )
    with console.status("Generating plan..."):
        html = ctx.obj["ai"].generate_plan_html(
            PlanRequest(perfil=perfil, idioma=lang), cancel=_cancel_token(ctx)
        )
    _emit_html(html, output)


@cli.command()
@click.option("--context", "context_path", type=click.Path(exists=True, dir_okay=False),
              required=True, help="JSON file with the context to explain")
@click.option("--lang", default=None)
@click.option("--output", "-o", default=None)
@click.pass_context
@_handle_errors
def explain(ctx, context_path: str, lang: Optional[str], output: Optional[str]):
    """Generate a coach-style explanation."""
    body = ExplainRequest(contexto=_read_json_file(context_path), idioma=lang)
    with console.status("Generating explanation..."):
        html = ctx.obj["ai"].generate_explain_html(body, cancel=_cancel_token(ctx))
    _emit_html(html, output)


@cli.command()
@click.pass_context
def info(ctx):
    """Show the active configuration."""
    api, ai = ctx.obj["api"], ctx.obj["ai"]
    console.print(Panel.fit(
        "[bold blue]SkillBridge[/bold blue]\n"
        f"[dim]CRUD API:[/dim] {api.base_url}\n"
        f"[dim]AI API:[/dim]   {ai.base_url}\n"
        f"[dim]Token:[/dim]    {'set' if api.token else 'none'}",
        border_style="blue"
    ))


if __name__ == "__main__":
    cli()
