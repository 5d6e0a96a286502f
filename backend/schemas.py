from pydantic import BaseModel, Field


class Participant(BaseModel):
    id: str
    name: str
    is_active: bool = True
    is_paused: bool = False
    sit_out_count: int = Field(default=0, ge=0)

    @property
    def is_eligible(self) -> bool:
        return self.is_active and not self.is_paused


class Partnership(BaseModel):
    player1_id: str
    player2_id: str
    times_played: int = Field(default=1, ge=1)
    recent_rounds: list[str] = Field(default_factory=list)


class Assignment(BaseModel):
    station_number: int = Field(ge=1)
    round_id: str
    player_ids: list[str] = Field(default_factory=list)


class SessionState(BaseModel):
    participants: list[Participant] = Field(default_factory=list)
    partnerships: list[Partnership] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
    last_sit_out_ids: list[str] = Field(default_factory=list)


class PlayerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=60)
