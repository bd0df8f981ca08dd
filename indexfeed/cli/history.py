"""History command implementations for the indexfeed CLI."""

from __future__ import annotations

from datetime import date, datetime

import typer
from pydantic import ValidationError

from indexfeed.core.config import IndexFeedConfig
from indexfeed.core.exceptions import ConfigurationError, DataIntegrityError, ErrorCode, NoDataError
from indexfeed.core.logging import add_file_sink
from indexfeed.core.models import HistoryRequestBuilder, TradeBar
from indexfeed.core.services import ExchangeHoursProvider, IndexHistoryProvider

from .constants import DATA_INTEGRITY_EXIT_CODE, NO_DATA_EXIT_CODE, SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import emit_error, load_config, prepare_output

history_app = typer.Typer(help="Index history operations.")

DEFAULT_COLUMNS = ["symbol", "time", "end_time", "open", "high", "low", "close", "volume"]


def register(app: typer.Typer) -> None:
    """Register the history command group on the provided application."""

    app.add_typer(history_app, name="history", help="Fetch daily index history")


def get_history_provider(config: IndexFeedConfig) -> IndexHistoryProvider:
    """Factory hook for obtaining an :class:`IndexHistoryProvider`."""

    return IndexHistoryProvider.from_config(config)


@history_app.command("fetch")
def fetch_command(
    ctx: typer.Context,
    symbols: str = typer.Option(None, "--symbols", help="Comma separated index symbols, e.g. SPX,NDX."),
    start: str = typer.Option(..., "--start", help="Start date (YYYY-MM-DD)."),
    end: str = typer.Option(..., "--end", help="End date (YYYY-MM-DD), inclusive."),
    market: str = typer.Option("us", "--market", help="Market whose exchange hours apply."),
    extended_hours: bool = typer.Option(False, "--extended-hours", help="Include pre/post market data."),
    precise_end_time: bool | None = typer.Option(
        None,
        "--precise-end-time/--calendar-end-time",
        help="End bars at the session close instead of midnight (overrides config).",
    ),
) -> None:
    """Fetch daily bars for index symbols and render them."""

    formatter, stream, stack, options = prepare_output(ctx)
    collected = _collect_symbols(symbols)
    if not collected:
        stack.close()
        emit_error("No symbols supplied for fetch command.", "SYMBOLS_MISSING")
        raise typer.Exit(code=VALIDATION_EXIT_CODE)

    try:
        requests = (
            HistoryRequestBuilder()
            .symbols(collected)
            .exchange_hours(ExchangeHoursProvider().get(market))
            .extended_hours(extended_hours)
            .date_range(_parse_date(start, "--start"), _parse_date(end, "--end"))
            .build()
        )
    except (ValidationError, ValueError) as error:
        stack.close()
        emit_error(str(error), "VALIDATION_ERROR")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error

    try:
        config = load_config(options)
    except (ConfigurationError, ValueError) as error:
        stack.close()
        emit_error(str(error), ErrorCode.CONFIGURATION_ERROR.value)
        raise typer.Exit(code=SYSTEM_EXIT_CODE) from error

    if config.logging.file:
        add_file_sink(config.logging.file, config.logging.level)
    if precise_end_time is not None:
        config.history.daily_precise_end_time = precise_end_time

    with get_history_provider(config) as provider:
        slices = provider.get_history(requests)

    if slices is None:
        stack.close()
        no_data = NoDataError("No data returned for the requested symbols.", symbols=collected)
        emit_error(no_data.message, no_data.error_code, details=no_data.details)
        raise typer.Exit(code=NO_DATA_EXIT_CODE)

    try:
        rows = [_bar_to_row(bar) for data_slice in slices for bar in data_slice.bars.values()]
    except DataIntegrityError as error:
        stack.close()
        emit_error(error.message, error.error_code, details=error.details)
        raise typer.Exit(code=DATA_INTEGRITY_EXIT_CODE) from error

    try:
        formatter.render(rows, stream=stream, columns=DEFAULT_COLUMNS)
    finally:
        stack.close()


def _collect_symbols(symbols: str | None) -> list[str]:
    collected: list[str] = []
    if symbols:
        for candidate in symbols.split(","):
            value = candidate.strip().lstrip("^")
            if value:
                collected.append(value)
    return collected


def _parse_date(value: str, option: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f"Invalid date '{value}' for {option}; expected YYYY-MM-DD.") from exc


def _bar_to_row(bar: TradeBar) -> dict[str, object]:
    return {
        "symbol": bar.symbol,
        "time": bar.time,
        "end_time": bar.end_time,
        "open": bar.open,
        "high": bar.high,
        "low": bar.low,
        "close": bar.close,
        "volume": bar.volume,
    }


__all__ = ["fetch_command", "get_history_provider", "history_app", "register"]
