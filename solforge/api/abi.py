from fastapi import APIRouter

from ..schema.abi import CategorizeAbiRequest, FormatResultRequest, ParseArgumentsRequest
from ..service.abi_parser import categorize_abi, format_function_signature
from ..service.argument_codec import format_result, parse_call_arguments
from ..util.exceptions import ArgumentError, ValidationException
from ..util.responses import APIResponse

router = APIRouter(prefix="/abi", tags=["ABI"])


@router.post("/categorize", response_model=APIResponse)
async def categorize(request: CategorizeAbiRequest):
    """
    Separa a ABI em funções de leitura, escrita e eventos
    """
    categorized = categorize_abi(request.abi)

    signatures = {
        entry["name"]: format_function_signature(entry)
        for entry in categorized.read_functions + categorized.write_functions
        if entry.get("name")
    }

    return APIResponse.success_response(
        data={**categorized.to_dict(), "signatures": signatures},
        message="ABI categorizada"
    )


@router.post("/arguments", response_model=APIResponse)
async def parse_arguments(request: ParseArgumentsRequest):
    """
    Converte os valores digitados em argumentos tipados para a chamada
    """
    try:
        args = parse_call_arguments(request.inputs, request.values)
    except ArgumentError as e:
        raise ValidationException(str(e), field=e.param)

    return APIResponse.success_response(
        data={"args": args},
        message="Argumentos convertidos"
    )


@router.post("/format-result", response_model=APIResponse)
async def format_call_result(request: FormatResultRequest):
    """Formata o retorno de uma chamada para exibição"""
    return APIResponse.success_response(
        data={"result": format_result(request.result)},
        message="Resultado formatado"
    )
