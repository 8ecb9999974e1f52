"""
Configuração global dos testes
Desliga o envio de traces do ddtrace (não há agent nos testes)
"""
import os
import sys

os.environ.setdefault('DD_TRACE_ENABLED', 'false')
os.environ.setdefault('POWERTOOLS_SERVICE_NAME', 'weather-forecast-api-test')
os.environ.setdefault('SEED_DATA_ENABLED', 'false')

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../'))
