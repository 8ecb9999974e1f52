"""
Configurações centralizadas da aplicação
"""
import os


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


# API
API_BASE_PATH = os.environ.get('API_BASE_PATH', '/api/v1').rstrip('/')

# Repositório: 'memory' (padrão) ou 'dynamodb'
REPOSITORY_BACKEND = os.environ.get('REPOSITORY_BACKEND', 'memory').lower()

# Dados fake carregados no startup (backend em memória)
SEED_DATA_ENABLED = _env_bool('SEED_DATA_ENABLED', 'true')
SEED_DATA_AMOUNT = int(os.environ.get('SEED_DATA_AMOUNT', '1000'))

# AWS
AWS_REGION = os.environ.get('AWS_REGION', 'sa-east-1')
DYNAMODB_TABLE_NAME = os.environ.get('DYNAMODB_TABLE_NAME', 'weather-forecasts')

# OpenBreweryDB (consumido pelo handler do evento de criação)
BREWERY_API_BASE_URL = os.environ.get('BREWERY_API_BASE_URL', 'https://api.openbrewerydb.org/v1').rstrip('/')

# Pipeline
PIPELINE_RETRY_COUNT = int(os.environ.get('PIPELINE_RETRY_COUNT', '3'))
PIPELINE_RETRY_BACKOFF_SECONDS = float(os.environ.get('PIPELINE_RETRY_BACKOFF_SECONDS', '0.1'))

# Paginação
DEFAULT_PAGE_SIZE = int(os.environ.get('DEFAULT_PAGE_SIZE', '10'))
MAX_PAGE_SIZE = int(os.environ.get('MAX_PAGE_SIZE', '100'))

# Tempo reservado antes do timeout da Lambda (ms)
REQUEST_TIMEOUT_MARGIN_MS = int(os.environ.get('REQUEST_TIMEOUT_MARGIN_MS', '500'))

# Espera opcional pelos handlers de eventos antes de retornar (segundos)
# 0 = não espera; as tasks seguem no loop persistente nas próximas invocações
EVENT_FLUSH_TIMEOUT_SECONDS = float(os.environ.get('EVENT_FLUSH_TIMEOUT_SECONDS', '0'))

# CORS
CORS_ORIGIN = os.environ.get('CORS_ORIGIN', '*')

# HTTP (clientes externos)
HTTP_TOTAL_TIMEOUT_SECONDS = int(os.environ.get('HTTP_TOTAL_TIMEOUT_SECONDS', '10'))
HTTP_CONNECT_TIMEOUT_SECONDS = int(os.environ.get('HTTP_CONNECT_TIMEOUT_SECONDS', '3'))

# DynamoDB local (ex: http://localhost:8000); vazio usa o endpoint da AWS
DYNAMODB_ENDPOINT_URL = os.environ.get('DYNAMODB_ENDPOINT_URL') or None
