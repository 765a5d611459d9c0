from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from game_scheduler.config import ConfigurationError
from game_scheduler.utils.timezone import DateFormatError, validate_date


class TeamInfo(BaseModel):
    """Team block as returned by the NHL API and forwarded in task payloads"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: int = Field(..., description="NHL team ID")
    common_name: dict[str, str] | None = Field(None, alias="commonName")
    place_name: dict[str, str] | None = Field(None, alias="placeName")
    place_name_with_preposition: dict[str, str] | None = Field(
        None, alias="placeNameWithPreposition"
    )
    abbrev: str = Field("", description="Three-letter team code")


class Game(BaseModel):
    """Single scheduled NHL game"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: int = Field(..., description="NHL game ID")
    game_date: str = Field(..., alias="gameDate", description="Game date (YYYY-MM-DD)")
    start_time_utc: str = Field("", alias="startTimeUTC", description="RFC 3339 start time")
    away_team: TeamInfo = Field(..., alias="awayTeam")
    home_team: TeamInfo = Field(..., alias="homeTeam")

    @field_validator("start_time_utc", mode="before")
    @classmethod
    def null_start_to_empty(cls, v):
        """A missing start is rejected per game later, not for the whole schedule"""
        return "" if v is None else v


class GameWeek(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date: str
    games: list[Game] = Field(default_factory=list)


class ScheduleResponse(BaseModel):
    """NHL API schedule response"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    game_week: list[GameWeek] = Field(default_factory=list, alias="gameWeek")

    def games(self) -> list[Game]:
        """Flatten the week buckets, keeping API order."""
        return [game for week in self.game_week for game in week.games]


class TaskGame(BaseModel):
    """Game section of a task payload"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    game_date: str = Field(..., alias="gameDate")
    start_time_utc: str = Field(..., alias="startTimeUTC")
    home_team: TeamInfo = Field(..., alias="homeTeam")
    away_team: TeamInfo = Field(..., alias="awayTeam")


class TaskPayload(BaseModel):
    """HTTP body of a created task, consumed by the game tracker"""
    model_config = ConfigDict(populate_by_name=True)

    game: TaskGame
    execution_end: str | None = Field(None, alias="execution_end")
    should_notify: bool = Field(..., alias="ShouldNotify")

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class RunConfig(BaseModel):
    """Resolved options for a single scheduling run"""
    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Date to query games for (YYYY-MM-DD)")
    teams: list[int] = Field(default_factory=list, description="Team IDs, empty means all teams")
    test_mode: bool = False
    all_teams: bool = False
    today: bool = False
    production: bool = False
    shootout: bool = False
    project_id: str = "localproject"
    location: str = "us-south1"
    queue_name: str = "gameschedule"
    local_mode: bool = False
    host_url: str | None = None
    local_target_url: str = "http://host.docker.internal:8080"
    emulator_host: str = "localhost:8123"
    emulator_connect_timeout_sec: float = 10.0
    nhl_api_base_url: str = "https://api-web.nhle.com/v1"
    http_timeout_sec: float = 10.0
    discord_webhook_url: str | None = None
    discord_user_id: str | None = None
    redis_url: str | None = None
    redis_queue_name: str = "game-notifications"

    @field_validator("date")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        try:
            return validate_date(v)
        except DateFormatError as e:
            raise ValueError(str(e)) from e

    @field_validator("project_id", "location", "queue_name")
    @classmethod
    def validate_queue_identity(cls, v: str, info) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_destination(self):
        """Exactly one of local mode or a custom host URL must be chosen"""
        if not self.local_mode and not self.host_url:
            raise ConfigurationError("Either --local or --host <url> must be provided")
        if self.local_mode and self.host_url:
            raise ConfigurationError("Cannot specify both --local and --host flags")
        if self.host_url and not self.host_url.lower().startswith(("http://", "https://")):
            raise ConfigurationError(f"Host URL must be HTTP/HTTPS: {self.host_url}")
        return self

    @property
    def queue_path(self) -> str:
        return f"projects/{self.project_id}/locations/{self.location}/queues/{self.queue_name}"
