"""Pydantic schemas for configuration, seed rows and snapshot validation."""

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import DEFAULT_GOD_ORDER


def _ascending(weeks: list[int]) -> list[int]:
    if not weeks:
        raise ValueError('Week list must not be empty')
    for prev, cur in zip(weeks, weeks[1:]):
        if cur <= prev:
            raise ValueError(f'Weeks must be strictly ascending, got {weeks}')
    return weeks


class RetrySettings(BaseModel):
    """Retry policy settings for score-feed and registry calls."""

    max_attempts: int = Field(3, ge=1, le=10)
    backoff_seconds: float = Field(0.5, ge=0, le=60)

    class Config:
        extra = 'forbid'


class GauntletConfig(BaseModel):
    """Gauntlet Leg 3 configuration settings."""

    year: int = Field(..., ge=2020, le=2100)
    name: str = 'Ballsville Gauntlet – Leg 3'
    guillotine_weeks: list[int] = Field(default_factory=lambda: [9, 10, 11, 12])
    round_weeks: list[int] = Field(default_factory=lambda: [13, 14, 15, 16])
    grand_championship_week: int = Field(17, ge=1, le=18)
    survivor_target: int = Field(8, ge=1)
    max_bracket_seeds: int = Field(8, ge=1)
    concurrency: int = Field(5, ge=1, le=32)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    timezone: str = 'America/Detroit'
    god_order: dict[str, list[str]] = Field(default_factory=lambda: dict(DEFAULT_GOD_ORDER))

    @field_validator('guillotine_weeks', 'round_weeks')
    @classmethod
    def validate_weeks(cls, v):
        """Ensure week windows are non-empty and strictly ascending."""
        for week in v:
            if not (1 <= week <= 18):
                raise ValueError(f'Week must be 1-18, got {week}')
        return _ascending(v)

    @model_validator(mode='after')
    def validate_phase_order(self):
        """Ensure guillotine < rounds < grand championship."""
        if self.guillotine_weeks[-1] >= self.round_weeks[0]:
            raise ValueError('Guillotine window must end before the first round week')
        if self.grand_championship_week <= self.round_weeks[-1]:
            raise ValueError('Grand championship week must follow the last round week')
        return self

    @property
    def best_ball_weeks(self) -> list[int]:
        """Weeks scored in best ball: first round week through the grand championship."""
        return list(range(self.round_weeks[0], self.grand_championship_week + 1))

    class Config:
        extra = 'forbid'


class SeedRow(BaseModel):
    """One owner row from the seed registry."""

    id: int | str | None = None
    year: int | str | None = None
    league_id: str = Field(..., min_length=1)
    league_name: str | None = None
    division: str = 'Unknown'
    god_name: str | None = None
    god: str | None = None
    side: str = Field('light', pattern=r'^(light|dark)$')
    owner_id: str | None = None
    owner_name: str | None = None
    seed: int | None = Field(None, ge=1)

    @field_validator('league_id', 'owner_id', mode='before')
    @classmethod
    def normalize_id(cls, v):
        """Sleeper ids arrive as numbers or strings; keep them as trimmed strings."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator('division', mode='before')
    @classmethod
    def default_division(cls, v):
        """Registry columns come back as null when empty."""
        return v or 'Unknown'

    @field_validator('side', mode='before')
    @classmethod
    def default_side(cls, v):
        return v or 'light'

    @property
    def unit_name(self) -> str:
        return self.god_name or self.god or 'Unknown God'

    class Config:
        extra = 'allow'


class SeedsFile(BaseModel):
    """Complete seeds JSON file structure."""

    seeds: list[SeedRow]

    class Config:
        extra = 'forbid'


class SnapshotFile(BaseModel):
    """Top-level shape of an assembled Leg 3 snapshot."""

    year: int
    name: str
    updated_at: str = Field(..., alias='updatedAt')
    status: str = Field(..., pattern=r'^(ok|partial|missing_seeds)$')
    missing_seeds: list[dict] = Field(..., alias='missingSeeds')
    divisions: dict[str, dict]
    grand_championship: dict | None = Field(..., alias='grandChampionship')

    @field_validator('divisions')
    @classmethod
    def validate_divisions(cls, v):
        """Every division must carry a gods list."""
        for name, division in v.items():
            if not isinstance(division.get('gods'), list):
                raise ValueError(f'Division {name} has no gods list')
        return v

    class Config:
        extra = 'allow'
