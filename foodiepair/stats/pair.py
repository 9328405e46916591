from __future__ import annotations

from typing import Sequence

import pandas as pd
from pydantic import BaseModel, Field

from ..recommendations.engine import SUB_SCORE_COLUMNS
from ..recommendations.models import Rating


class PairStatsRequest(BaseModel):
    ratings: list[Rating] = Field(default_factory=list)
    members: list[str] = Field(..., min_length=1, max_length=2)


class MemberStats(BaseModel):
    user_id: str
    avg_score: float
    count: int


class PairStatsResponse(BaseModel):
    members: list[MemberStats]
    pickiest: str


def compute_pair_stats(ratings: Sequence[Rating], members: Sequence[str]) -> PairStatsResponse:
    """
    Average each member's ratings and pick the harshest critic.

    A rating's overall score is the plain mean of its four sub-scores; a
    member's average is the mean of those over all their ratings.
    """
    df = pd.DataFrame(
        [r.model_dump(include={"user_id", *SUB_SCORE_COLUMNS}) for r in ratings],
        columns=["user_id", *SUB_SCORE_COLUMNS],
    )
    df["overall"] = df[SUB_SCORE_COLUMNS].astype("float64").mean(axis=1)
    per_user = df.groupby("user_id")["overall"].agg(["mean", "count"])

    stats: list[MemberStats] = []
    for user_id in members:
        if user_id in per_user.index:
            row = per_user.loc[user_id]
            stats.append(MemberStats(
                user_id=user_id,
                avg_score=float(row["mean"]),
                count=int(row["count"]),
            ))
        else:
            stats.append(MemberStats(user_id=user_id, avg_score=0.0, count=0))

    pickiest = stats[0]
    if len(stats) == 2 and not stats[0].avg_score < stats[1].avg_score:
        pickiest = stats[1]
    return PairStatsResponse(members=stats, pickiest=pickiest.user_id)
