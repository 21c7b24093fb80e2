# sentinelmind/services/analysis.py
"""
Frontera con el proveedor externo de análisis (un LLM alojado).

El proveedor recibe el tipo de contenido y el texto y devuelve un veredicto
estructurado. Aquí no se decide el prompt ni el modelo: solo la forma del
resultado y cómo se convierte en un registro de amenaza.
"""
import logging
from typing import Protocol

from pydantic import BaseModel, Field, ValidationError

from sentinelmind.core.errors import AnalysisUnavailable
from sentinelmind.services.threats import ThreatStore

logger = logging.getLogger(__name__)


class AnalysisResult(BaseModel):
    # Rangos y etiquetas no se validan: se guardan tal cual los da el proveedor
    risk_score: int
    severity: str
    intent: str
    manipulation_patterns: list[str] = Field(default_factory=list)
    patterns_found: list[str] = Field(default_factory=list)
    recommendation: str
    confidence: float
    verdict: str


class AnalysisProvider(Protocol):
    async def analyze(self, kind: str, content: str) -> AnalysisResult: ...


async def analyze_and_record(
    provider: AnalysisProvider | None,
    store: ThreatStore,
    kind: str,
    content: str,
) -> tuple[int, AnalysisResult]:
    """Llama al proveedor y persiste un único registro con su resultado."""
    if provider is None:
        raise AnalysisUnavailable("analysis provider not configured")
    try:
        result = await provider.analyze(kind, content)
    except ValidationError as e:
        raise AnalysisUnavailable("analysis provider returned a malformed verdict") from e
    except Exception as e:
        logger.exception("analysis provider failed")
        raise AnalysisUnavailable(f"analysis provider failed: {e.__class__.__name__}") from e

    threat_id = await store.insert(
        type=kind,
        content=content,
        risk_score=result.risk_score,
        severity=result.severity,
        intent=result.intent,
        verdict=result.verdict,
    )
    return threat_id, result
