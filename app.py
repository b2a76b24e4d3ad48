import logging
import os
from flask import Flask
from config import config
from drillcost.routes.simulation import simulation_bp
from drillcost.routes.optimizer import optimizer_bp


def create_app(config_name=None):
    app = Flask(__name__)

    config_name = config_name or os.environ.get('FLASK_CONFIG', 'default')
    app.config.from_object(config[config_name])

    # Environment variables override the selected config class
    if 'DEBUG' in os.environ:
        app.config['DEBUG'] = os.environ['DEBUG'].lower() == 'true'
    if 'TESTING' in os.environ:
        app.config['TESTING'] = os.environ['TESTING'].lower() == 'true'

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Scenario simulation, comparison and validation
    app.register_blueprint(simulation_bp, url_prefix='/api/v1/simulation')

    # Bit sequence optimizer
    app.register_blueprint(optimizer_bp, url_prefix='/api/v1/optimizer')

    @app.route('/healthz', methods=['GET'])
    def health_check():
        return {'status': 'healthy'}, 200

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
