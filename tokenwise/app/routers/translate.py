from fastapi import APIRouter, Depends

from ..errors import upstream_errors
from ..schemas import TranslateRequest, TranslateResponse
from ..translation import GoogleTranslateClient, get_translator

router = APIRouter(prefix="/api", tags=["translate"])


@router.post("/translate", response_model=TranslateResponse)
async def translate_text(
    payload: TranslateRequest,
    translator: GoogleTranslateClient = Depends(get_translator),
) -> TranslateResponse:
    with upstream_errors("Translate route"):
        result = await translator.translate(payload.text, payload.target_lang, payload.source_lang)

    return TranslateResponse(
        translated_text=result.text,
        provider=translator.provider,
        target_lang=payload.target_lang,
        source_lang=payload.source_lang,
    )
