from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_NAME: str = "SolForge API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Compilador Solidity
    SOLC_LIST_URL: str = "https://binaries.soliditylang.org/linux-amd64/list.json"
    SOLC_DEFAULT_VERSION: str = "0.8.20"

    # Dependências remotas (namespace único)
    DEPENDENCY_NAMESPACE: str = "@openzeppelin/contracts/"
    DEPENDENCY_BASE_URL: str = "https://raw.githubusercontent.com/OpenZeppelin/openzeppelin-contracts/v5.0.0/contracts"

    # None = sem timeout (requisição bloqueia até o servidor responder)
    FETCH_TIMEOUT: Optional[float] = None

    # Redis (rate limit)
    REDIS_URL: str = "redis://localhost:6379/0"
    COMPILE_RATE_LIMIT: int = 20
    COMPILE_RATE_WINDOW: int = 60

    # Verificação em block explorers
    ETHERSCAN_API_KEY: Optional[str] = None
    ETHERSCAN_V2_BASE_URL: str = "https://api.etherscan.io/v2/api"

    class Config:
        env_file = ".env"


settings = Settings()
