"""Application entry point defining the HTTP API."""
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Protocol, TypeVar

from fastapi import (
    APIRouter,
    FastAPI,
    File,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)
from fastapi.middleware.cors import CORSMiddleware

from footballstats.application.process_results_feed import (
    ProcessResultsFeedUseCase,
    ResultsFeedParser,
    RetrieveLeagueSeasonUseCase,
)
from footballstats.application.season_queries import (
    RetrieveAttendanceExtremesUseCase,
    RetrieveAttendanceTableUseCase,
    RetrieveLeagueTableUseCase,
    RetrieveResultsByDateUseCase,
    RetrieveSeasonSummaryUseCase,
    RetrieveSequenceTableUseCase,
    RetrieveTeamUseCase,
    SeasonNotLoadedError,
)
from footballstats.config.settings import get_settings
from footballstats.domain.errors import UnknownTeamError
from footballstats.domain.models.sequence import SequenceType
from footballstats.domain.models.team import AttendanceType
from footballstats.domain.models.venue import VenueType
from footballstats.domain.repositories.results_feed_repository import ResultsFeedRepository
from footballstats.domain.services.rankings import TableType
from footballstats.infrastructure.parsers.results_feed_parser import (
    ResultsFeedParser as PipeDelimitedFeedParser,
    parse_feed_date,
)
from footballstats.infrastructure.repositories.text_results_feed_repository import (
    TextResultsFeedRepository,
)


def create_app(
    results_repo: ResultsFeedRepository | None = None,
    feed_parser: ResultsFeedParser | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance."""

    settings = get_settings()
    results_repository = results_repo or TextResultsFeedRepository(settings.results_path)
    parser = feed_parser or PipeDelimitedFeedParser()

    feed_processor = ProcessResultsFeedUseCase(parser, results_repository)
    season_retriever = RetrieveLeagueSeasonUseCase(parser, results_repository)

    summary_retriever = RetrieveSeasonSummaryUseCase(season_retriever)
    table_retriever = RetrieveLeagueTableUseCase(season_retriever)
    sequence_retriever = RetrieveSequenceTableUseCase(season_retriever)
    attendance_retriever = RetrieveAttendanceTableUseCase(season_retriever)
    attendance_extremes_retriever = RetrieveAttendanceExtremesUseCase(season_retriever)
    team_retriever = RetrieveTeamUseCase(season_retriever)
    results_retriever = RetrieveResultsByDateUseCase(season_retriever)

    app = FastAPI(title="Football Statistics API", version=settings.app_version)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def get_root() -> dict[str, str]:
        """Return a simple heartbeat response for uptime monitoring."""

        return {"message": "RUNNING FOOTBALL STATS"}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_router = APIRouter(prefix=settings.api_prefix)

    @api_router.get("/status", status_code=status.HTTP_200_OK)
    async def get_status() -> dict:
        """Return the operational status and version of the service."""

        return {"status": "ok", "version": settings.app_version}

    @api_router.put("/results", status_code=status.HTTP_200_OK)
    async def upload_results(response: Response, file: UploadFile = File(...)) -> dict:
        """Validate and store the uploaded results feed, returning the season summary."""

        feed_text = await _read_feed_text(file, settings.max_upload_size_bytes)
        season = _execute_processor(feed_processor.execute, feed_text)
        response.headers["Location"] = f"{settings.api_prefix}/season"
        return season.to_dict()

    @api_router.get("/season", status_code=status.HTTP_200_OK)
    async def get_season() -> dict:
        """Return the season aggregates, zones and key results."""

        season = _execute_query(summary_retriever.execute)
        return season.to_dict()

    @api_router.get("/teams", status_code=status.HTTP_200_OK)
    async def get_teams() -> dict:
        """Return the names of all teams in alphabetical order."""

        season = _execute_query(summary_retriever.execute)
        return {"teams": season.team_names}

    @api_router.get("/teams/{team_name}", status_code=status.HTTP_200_OK)
    async def get_team(team_name: str, venue: VenueType = VenueType.BOTH) -> dict:
        """Return the record of ``team_name`` for the requested venue."""

        team = _execute_query(team_retriever.execute, team_name)
        return team.to_dict(venue)

    @api_router.get("/dates", status_code=status.HTTP_200_OK)
    async def get_dates() -> dict:
        """Return the match dates, most recent first."""

        season = _execute_query(summary_retriever.execute)
        return {"dates": [match_date.isoformat() for match_date in season.dates]}

    @api_router.get("/results/{match_date}", status_code=status.HTTP_200_OK)
    async def get_results(match_date: str) -> dict:
        """Return the results played on ``match_date`` (``ddMMyyyy``)."""

        parsed_date = _parse_path_date(match_date)
        results = _execute_query(results_retriever.execute, parsed_date)
        if not results:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No results found for the requested date.",
            )
        return {
            "date": parsed_date.isoformat(),
            "results": [result.to_dict() for result in results],
        }

    @api_router.get("/tables/{table_type}", status_code=status.HTTP_200_OK)
    async def get_table(table_type: TableType, venue: VenueType = VenueType.BOTH) -> dict:
        """Return the requested league table ordering."""

        table = _execute_query(table_retriever.execute, table_type, venue)
        return table.to_dict()

    @api_router.get("/sequences/{sequence}", status_code=status.HTTP_200_OK)
    async def get_sequence_table(
        sequence: SequenceType,
        venue: VenueType = VenueType.BOTH,
        current: bool = True,
    ) -> dict:
        """Return teams ranked by the current or best run of ``sequence``."""

        ranking = _execute_query(sequence_retriever.execute, sequence, venue, current)
        return ranking.to_dict()

    @api_router.get("/attendances", status_code=status.HTTP_200_OK)
    async def get_attendance_table(
        attendance_type: AttendanceType = Query(AttendanceType.AVERAGE, alias="type"),
    ) -> dict:
        """Return teams ranked by a home attendance figure."""

        ranking = _execute_query(attendance_retriever.execute, attendance_type)
        return ranking.to_dict()

    @api_router.get("/attendances/highest", status_code=status.HTTP_200_OK)
    async def get_highest_attendances() -> dict:
        """Return the best attended matches of the season."""

        results = _execute_query(attendance_extremes_retriever.execute, True)
        return {"results": [result.to_dict() for result in results]}

    @api_router.get("/attendances/lowest", status_code=status.HTTP_200_OK)
    async def get_lowest_attendances() -> dict:
        """Return the worst attended matches of the season."""

        results = _execute_query(attendance_extremes_retriever.execute, False)
        return {"results": [result.to_dict() for result in results]}

    app.include_router(api_router)
    return app


app = create_app()


async def _read_feed_text(uploaded_file: UploadFile, max_size_bytes: int) -> str:
    """Read ``uploaded_file`` as UTF-8 text enforcing type, emptiness and size limits."""

    if uploaded_file.content_type not in {"text/plain", "application/octet-stream"}:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The uploaded file must be a plain text results feed.",
        )

    file_bytes = await uploaded_file.read()
    if not file_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The results feed is empty.",
        )

    if len(file_bytes) > max_size_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="The results feed exceeds the allowed size.",
        )

    try:
        return file_bytes.decode("utf-8")
    except UnicodeDecodeError as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The results feed must be UTF-8 encoded text.",
        ) from error


def _parse_path_date(value: str) -> date:
    """Convert a ``ddMMyyyy`` path segment into a date."""

    try:
        return parse_feed_date(value)
    except ValueError as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Dates must be formatted as ddMMyyyy.",
        ) from error


class _SerializableResource(Protocol):
    """Represent an object that can be expressed as a JSON-serializable dictionary."""

    def to_dict(self) -> dict:
        """Return the dictionary representation of the resource."""


_PayloadT = TypeVar("_PayloadT")
_ResultT = TypeVar("_ResultT")


def _execute_processor(
    processor: Callable[[_PayloadT], _SerializableResource], payload: _PayloadT
) -> _SerializableResource:
    """Execute a processor function converting domain ``ValueError`` to HTTP errors."""

    try:
        return processor(payload)
    except ValueError as processing_error:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(processing_error),
        ) from processing_error


def _execute_query(query: Callable[..., _ResultT], *args: Any) -> _ResultT:
    """Run a season query translating missing data into HTTP errors."""

    try:
        return query(*args)
    except (SeasonNotLoadedError, UnknownTeamError) as lookup_error:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(lookup_error),
        ) from lookup_error
    except ValueError as processing_error:
        # The stored feed no longer parses.
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(processing_error),
        ) from processing_error
