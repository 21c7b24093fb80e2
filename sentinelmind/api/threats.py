# sentinelmind/api/threats.py
import math
from datetime import datetime

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict

from sentinelmind.api.deps import current_identity, get_threats
from sentinelmind.services.analysis import analyze_and_record
from sentinelmind.services.sessions import Identity
from sentinelmind.services.threats import ThreatStore

router = APIRouter()


class ThreatInput(BaseModel):
    type: str
    content: str
    risk_score: int
    severity: str
    intent: str
    verdict: str


class ThreatOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    content: str
    risk_score: int
    severity: str
    intent: str
    verdict: str
    timestamp: datetime


class DashboardStats(BaseModel):
    totalThreats: int
    avgRisk: int
    criticalThreats: int
    recentThreats: list[ThreatOut]


class AnalyzeInput(BaseModel):
    type: str
    content: str


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@router.post("/threats", status_code=status.HTTP_201_CREATED)
async def submit_threat(
    body: ThreatInput,
    identity: Identity = Depends(current_identity),
    store: ThreatStore = Depends(get_threats),
):
    threat_id = await store.insert(**body.model_dump())
    return {"success": True, "id": threat_id}


@router.get("/threats", response_model=list[ThreatOut])
async def list_threats(
    identity: Identity = Depends(current_identity),
    store: ThreatStore = Depends(get_threats),
):
    return await store.list_all()


@router.get("/dashboard-stats", response_model=DashboardStats)
async def dashboard_stats(
    request: Request,
    identity: Identity = Depends(current_identity),
    store: ThreatStore = Depends(get_threats),
):
    cfg = request.app.state.settings
    return DashboardStats(
        totalThreats=await store.count_all(),
        avgRisk=round_half_up(await store.average_risk_score()),
        criticalThreats=await store.count_by_severity(cfg.critical_severity),
        recentThreats=[ThreatOut.model_validate(t) for t in await store.recent(cfg.dashboard_recent_limit)],
    )


@router.post("/analyze", status_code=status.HTTP_201_CREATED)
async def analyze(
    body: AnalyzeInput,
    request: Request,
    identity: Identity = Depends(current_identity),
    store: ThreatStore = Depends(get_threats),
):
    threat_id, result = await analyze_and_record(
        request.app.state.analysis_provider, store, body.type, body.content
    )
    return {"id": threat_id, "analysis": result.model_dump()}
