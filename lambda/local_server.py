#!/usr/bin/env python3
"""
Servidor Local para Desenvolvimento
Simula AWS Lambda + API Gateway localmente usando Flask

Pré-requisitos:
    - Ambiente virtual ativado: source .venv/bin/activate
    - Dependências instaladas: pip install -e ".[dev]"

Como usar:
    cd lambda
    python local_server.py

Endpoints disponíveis:
    GET    http://localhost:8000/api/v1/weatherforecast?pageNumber=1&pageSize=10
    GET    http://localhost:8000/api/v1/weatherforecast/{id}
    POST   http://localhost:8000/api/v1/weatherforecast
           Body: { "date": "2024-01-15", "temperatureC": 25, "summary": "Warm" }
    PUT    http://localhost:8000/api/v1/weatherforecast
           Body: { "id": "...", "temperatureC": 20, "summary": "Mild" }
    DELETE http://localhost:8000/api/v1/weatherforecast
           Body: { "id": "..." }
"""
import os
import sys
import json
from flask import Flask, request, jsonify
from flask_cors import CORS
from datetime import datetime

# Garantir que o diretório lambda está no path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from lambda_function import lambda_handler
from shared.config.settings import API_BASE_PATH

app = Flask(__name__)
# Habilitar CORS para todos os endpoints e origens (desenvolvimento local)
CORS(app, resources={f"{API_BASE_PATH}/*": {"origins": "*"}}, expose_headers=["Location"])


class MockLambdaContext:
    """Mock do contexto Lambda para testes locais"""
    def __init__(self):
        self.aws_request_id = f"local-{datetime.now().timestamp()}"
        self.function_name = "local-weather-forecast-api"
        self.function_version = "$LATEST"
        self.invoked_function_arn = "arn:aws:lambda:local:000000000000:function:local-weather-forecast-api"
        self.memory_limit_in_mb = "512"
        self.log_group_name = "/aws/lambda/local-weather-forecast-api"
        self.log_stream_name = "local"

    def get_remaining_time_in_millis(self):
        return 30000  # 30 segundos


def flask_to_lambda_event(flask_request):
    """Converte requisição Flask para evento Lambda/API Gateway"""
    query_string_parameters = dict(flask_request.args.items())
    body = flask_request.data.decode('utf-8') if flask_request.data else None

    return {
        'resource': flask_request.path,
        'path': flask_request.path,
        'httpMethod': flask_request.method,
        'headers': dict(flask_request.headers.items()),
        'queryStringParameters': query_string_parameters or None,
        'body': body,
        'isBase64Encoded': False,
        'requestContext': {
            'accountId': '000000000000',
            'apiId': 'local',
            'protocol': 'HTTP/1.1',
            'httpMethod': flask_request.method,
            'path': flask_request.path,
            'stage': 'local',
            'requestId': f"local-{datetime.now().timestamp()}",
            'requestTimeEpoch': int(datetime.now().timestamp() * 1000),
            'identity': {
                'sourceIp': flask_request.remote_addr,
                'userAgent': flask_request.headers.get('User-Agent', '')
            }
        }
    }


def lambda_to_flask_response(lambda_response):
    """Converte resposta Lambda para resposta Flask"""
    status_code = lambda_response.get('statusCode', 200)
    headers = dict(lambda_response.get('headers') or {})
    for name, values in (lambda_response.get('multiValueHeaders') or {}).items():
        headers[name] = ', '.join(values)
    body = lambda_response.get('body', '')

    try:
        body_dict = json.loads(body) if isinstance(body, str) else body
        return jsonify(body_dict), status_code, headers
    except (json.JSONDecodeError, TypeError):
        return body or '', status_code, headers


@app.route(f'{API_BASE_PATH}/weatherforecast', methods=['GET', 'POST', 'PUT', 'DELETE'])
@app.route(f'{API_BASE_PATH}/weatherforecast/<weather_forecast_id>', methods=['GET'])
def weather_forecast(weather_forecast_id=None):
    """Repassa /weatherforecast para o lambda_handler"""
    event = flask_to_lambda_event(request)
    if weather_forecast_id is not None:
        event['pathParameters'] = {'weather_forecast_id': weather_forecast_id}

    response = lambda_handler(event, MockLambdaContext())

    return lambda_to_flask_response(response)


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'weather-forecast-api-local',
        'timestamp': datetime.now().isoformat()
    })


@app.errorhandler(404)
def not_found(error):
    """Handler para rotas não encontradas"""
    return jsonify({
        'error': 'Not Found',
        'message': f"Route {request.path} not found",
        'available_routes': [
            f'GET {API_BASE_PATH}/weatherforecast',
            f'GET {API_BASE_PATH}/weatherforecast/{{id}}',
            f'POST {API_BASE_PATH}/weatherforecast',
            f'PUT {API_BASE_PATH}/weatherforecast',
            f'DELETE {API_BASE_PATH}/weatherforecast',
            'GET /health'
        ]
    }), 404


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8000))
    host = os.environ.get('HOST', '0.0.0.0')

    print("=" * 70)
    print("🚀 Servidor Local - Weather Forecast API")
    print("=" * 70)
    print(f"\n📍 Rodando em: http://{host}:{port}")
    print("\n📋 Endpoints disponíveis:")
    print(f"   • GET    http://localhost:{port}{API_BASE_PATH}/weatherforecast?pageNumber=1&pageSize=10")
    print(f"   • GET    http://localhost:{port}{API_BASE_PATH}/weatherforecast/{{id}}")
    print(f"   • POST   http://localhost:{port}{API_BASE_PATH}/weatherforecast")
    print(f"   • PUT    http://localhost:{port}{API_BASE_PATH}/weatherforecast")
    print(f"   • DELETE http://localhost:{port}{API_BASE_PATH}/weatherforecast")
    print(f"   • GET    http://localhost:{port}/health")
    print("\n💡 Exemplo de uso:")
    print(f"   curl 'http://localhost:{port}{API_BASE_PATH}/weatherforecast?summary=Warm&pageSize=5'")
    print("\n" + "=" * 70 + "\n")

    # use_reloader=False: o store em memória seria recriado a cada reload
    app.run(host=host, port=port, debug=True, use_reloader=False)
