import logging
import json
import os
from datetime import datetime, timezone
from typing import Any, Dict
from ..config.settings import settings

os.makedirs(settings.LOG_DIR, exist_ok=True)

# Configurar logger
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(os.path.join(settings.LOG_DIR, 'app.log')),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger("solforge")


class CompilationAuditLogger:
    @staticmethod
    def log_compile_event(
            file_name: str,
            solc_version: str,
            success: bool = True,
            contract_name: str = None,
            message: str = None,
            details: Dict[str, Any] = None
    ):
        """Log de compilações para auditoria"""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "file_name": file_name,
            "solc_version": solc_version,
            "success": success,
            "contract_name": contract_name,
            "message": message,
            "details": details or {}
        }

        with open(os.path.join(settings.LOG_DIR, 'compilations.log'), 'a') as f:
            f.write(json.dumps(log_entry) + '\n')

        if success:
            logger.info(f"Compile Event: {file_name} - solc {solc_version} - Contract: {contract_name}")
        else:
            logger.warning(f"Compile Failed: {file_name} - solc {solc_version} - {message}")
