from fastapi import APIRouter, Depends

from mediadup.api.http.schemas.requests import CompareRequest
from mediadup.api.http.schemas.responses import CompareResponse
from mediadup.infrastructure.settings import get_settings, Settings
from mediadup.services.similarity import distance, is_similar, similarity_percent

router = APIRouter(tags=["compare"])

@router.post(
    "/compare",
    response_model=CompareResponse,
    summary="Distancia entre dos huellas",
    description=(
        "Cuenta los bits distintos tras aplicar la máscara del modo de tolerancia.\n\n"
        "- Si alguna huella es 0 (inválida) la distancia es 64.\n"
        "- Sin `mode` se usa `HASH_COMPARE_AREA`."
    ),
)
def compare(req: CompareRequest, settings: Settings = Depends(get_settings)) -> CompareResponse:
    mode = settings.HASH_COMPARE_AREA if req.mode is None else req.mode
    return CompareResponse(
        distance=distance(req.a, req.b, mode),
        similarity_percent=similarity_percent(req.a, req.b, mode),
        mode=mode,
        similar=is_similar(req.a, req.b, mode, settings.HASH_SIMILAR_MAX_DISTANCE),
    )
