from fastapi import APIRouter, Query
from starlette.concurrency import run_in_threadpool

from ..config.networks import get_network
from ..schema.verification import VerifyContractRequest
from ..service.verifier import contract_verifier
from ..util.exceptions import VerificationError
from ..util.responses import APIResponse

router = APIRouter(prefix="/verification", tags=["Verification"])


@router.post("/submit", response_model=APIResponse)
async def submit_verification(request: VerifyContractRequest):
    """
    Envia o fonte achatado para verificação no explorer da rede
    """
    success, message, guid = await run_in_threadpool(contract_verifier.verify_contract, request)

    if not success:
        raise VerificationError(message)

    network = get_network(request.chain_id)

    return APIResponse.success_response(
        data={
            "guid": guid,
            "status": "pending",
            "verification_url": f"{network.block_explorer}/address/{request.contract_address}#code"
        },
        message="Verificação enviada. Consultando status..."
    )


@router.get("/status", response_model=APIResponse)
async def verification_status(
        guid: str = Query(..., min_length=1),
        chain_id: int = Query(...)
):
    """Status de uma verificação enviada"""
    success, status = await run_in_threadpool(
        contract_verifier.check_verification_status, guid, chain_id
    )

    return APIResponse(
        success=success,
        message=status,
        data={"guid": guid, "status": status}
    )
