import os
from decimal import Decimal
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)

# Configuração de conexão
# DATABASE_URL tem precedência (ex.: sqlite:///./pizzaria.db em desenvolvimento)
DATABASE_URL = os.getenv("DATABASE_URL")

DB_CONFIG = {
    'database': os.getenv('DB_NAME'),
    'user': os.getenv('DB_USER'),
    'password': os.getenv('DB_PASSWORD'),
    'host': os.getenv('DB_HOST'),
    'port': int(os.getenv('DB_PORT', 5432)),
}

# SSL do banco (opcional)
DB_SSL_MODE = os.getenv('DB_SSL_MODE')  # ex.: require, verify-ca, verify-full

TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")

# JWT / Segurança (token emitido pelo serviço de autenticação)
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 90))

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "false").lower() in ("1", "true", "yes")

# FastAPI / App
BASE_URL = os.getenv("BASE_URL", "")
ENABLE_DOCS = os.getenv("ENABLE_DOCS", "true").lower() in ("1", "true", "yes")

# Logs
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", Path(__file__).resolve().parents[1] / "logs"))

# Padrões da pizzaria recém-cadastrada
EMPRESA_TAXA_ENTREGA_PADRAO = Decimal(os.getenv("EMPRESA_TAXA_ENTREGA_PADRAO", "5.00"))
EMPRESA_RAIO_ENTREGA_PADRAO = int(os.getenv("EMPRESA_RAIO_ENTREGA_PADRAO", 10))  # km
EMPRESA_PEDIDO_MINIMO_PADRAO = Decimal(os.getenv("EMPRESA_PEDIDO_MINIMO_PADRAO", "25.00"))
EMPRESA_TEMPO_ENTREGA_PADRAO = int(os.getenv("EMPRESA_TEMPO_ENTREGA_PADRAO", 45))  # minutos
EMPRESA_HORARIO_ABERTURA_PADRAO = "18:00"
EMPRESA_HORARIO_FECHAMENTO_PADRAO = "23:30"
EMPRESA_DIAS_FUNCIONAMENTO_PADRAO = [
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
]
EMPRESA_FORMAS_PAGAMENTO_PADRAO = ["cash", "credit", "debit", "pix"]
