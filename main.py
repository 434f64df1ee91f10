"""HTTP API for the community website: startups, partners, members and events."""
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

import click
from flask import Flask, request, jsonify
from config import config
from services import (
    CSVIngestService,
    LumaService,
    MemberService,
    NocoDBError,
    NocoDBService,
    PartnerService,
    StartupService,
)

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.json.sort_keys = False

STARTUPS_SETTINGS = ('NOCODB_API_TOKEN', 'NOCODB_STARTUPS_TABLE_ID')


def not_configured(message: str, *names: str):
    """Return a 500 response if any required setting is unset, else None."""
    missing = config.missing(*names)
    if not missing:
        return None
    logger.error(f"{message} - missing {', '.join(missing)}")
    return jsonify({'error': message}), 500


def nocodb_service() -> NocoDBService:
    return NocoDBService(config.nocodb_api_token, config.nocodb_base_url, timeout=config.http_timeout)


def startup_service() -> StartupService:
    return StartupService(nocodb_service(), config.nocodb_startups_table_id, config.nocodb_base_url)


def csv_service() -> CSVIngestService:
    return CSVIngestService(config.data_dir, spotlight_names=config.spotlight_startups,
                            yc_names=config.yc_startups)


def luma_service() -> LumaService:
    return LumaService(config.luma_api_key, config.luma_calendar_id,
                       base_url=config.luma_base_url, timeout=config.http_timeout)


@app.route('/api/startups', methods=['GET'])
def list_startups():
    """List all startups (NocoDB by default, the CSV export when STARTUPS_SOURCE=csv)."""
    logger.info(f"Received GET /api/startups request (source: {config.startups_source})")

    if config.startups_source == 'nocodb':
        error = not_configured('NocoDB not configured', *STARTUPS_SETTINGS)
        if error:
            return error
        logger.info(f"NocoDB token: {config.mask(config.nocodb_api_token)}, base URL: {config.nocodb_base_url}")

    try:
        if config.startups_source == 'nocodb':
            companies = startup_service().list_startups()
        else:
            companies = csv_service().load_startups()
        return jsonify([company.to_dict() for company in companies]), 200

    except Exception as e:
        logger.error(f"Error in /api/startups endpoint: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch startups'}), 500


@app.route('/api/startups/<int:startup_id>', methods=['GET'])
def get_startup(startup_id):
    """Get one startup from NocoDB."""
    error = not_configured('NocoDB not configured', *STARTUPS_SETTINGS)
    if error:
        return error

    try:
        company = startup_service().get_startup(startup_id)
        return jsonify(company.to_dict()), 200

    except NocoDBError as e:
        logger.error(f"Error fetching startup {startup_id}: {e}")
        if e.status_code == 404:
            return jsonify({'error': 'Startup not found'}), 404
        return jsonify({'error': 'Failed to fetch startup'}), 500
    except Exception as e:
        logger.error(f"Error fetching startup {startup_id}: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch startup'}), 500


@app.route('/api/startups/<int:startup_id>', methods=['PUT'])
def update_startup(startup_id):
    """Update a startup from the admin form."""
    logger.info(f"Received PUT /api/startups/{startup_id} request")

    error = not_configured('NocoDB not configured', *STARTUPS_SETTINGS)
    if error:
        return error

    try:
        form = request.get_json(silent=True)
        if not isinstance(form, dict):
            return jsonify({'error': 'No startup data provided'}), 400

        result = startup_service().update_startup(startup_id, form)
        return jsonify(result), 200

    except Exception as e:
        logger.error(f"Error updating startup {startup_id}: {e}", exc_info=True)
        return jsonify({'error': str(e) or 'Failed to update startup'}), 500


@app.route('/api/startups/<int:startup_id>', methods=['DELETE'])
def delete_startup(startup_id):
    """Delete a startup."""
    logger.info(f"Received DELETE /api/startups/{startup_id} request")

    error = not_configured('NocoDB not configured', *STARTUPS_SETTINGS)
    if error:
        return error

    try:
        result = startup_service().delete_startup(startup_id)
        return jsonify(result), 200

    except Exception as e:
        logger.error(f"Error deleting startup {startup_id}: {e}", exc_info=True)
        return jsonify({'error': str(e) or 'Failed to delete startup'}), 500


@app.route('/api/startups/add', methods=['POST'])
def add_startup():
    """Create a startup from the admin form."""
    logger.info("Received POST /api/startups/add request")

    error = not_configured('NocoDB not configured', *STARTUPS_SETTINGS)
    if error:
        return error

    try:
        form = request.get_json(silent=True)
        if not isinstance(form, dict):
            return jsonify({'error': 'No startup data provided'}), 400

        result = startup_service().create_startup(form)
        return jsonify(result), 200

    except Exception as e:
        logger.error(f"Error adding startup to NocoDB: {e}", exc_info=True)
        return jsonify({'error': str(e) or 'Failed to add startup'}), 500


@app.route('/api/partners', methods=['GET'])
def list_partners():
    """List partners marked as shown."""
    logger.info("Received GET /api/partners request")

    error = not_configured('NocoDB not configured for partners', 'NOCODB_API_TOKEN', 'NOCODB_PARTNERS_TABLE_ID')
    if error:
        return error

    try:
        service = PartnerService(nocodb_service(), config.nocodb_partners_table_id, config.nocodb_base_url)
        partners = service.list_partners()
        return jsonify([partner.to_dict() for partner in partners]), 200

    except Exception as e:
        logger.error(f"Error fetching partners from NocoDB: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch partners from database'}), 500


@app.route('/api/members', methods=['GET'])
def list_members():
    """List members (CSV by default, NocoDB when MEMBERS_SOURCE=nocodb)."""
    logger.info(f"Received GET /api/members request (source: {config.members_source})")

    if config.members_source == 'nocodb':
        error = not_configured('NocoDB not configured for members', 'NOCODB_API_TOKEN', 'NOCODB_MEMBERS_TABLE_ID')
        if error:
            return error

    try:
        if config.members_source == 'nocodb':
            service = MemberService(nocodb_service(), config.nocodb_members_table_id, config.nocodb_base_url)
            members = service.list_members()
        else:
            members = csv_service().load_members()
        return jsonify([member.to_dict() for member in members]), 200

    except Exception as e:
        logger.error(f"Error in /api/members endpoint: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch members'}), 500


@app.route('/api/luma/past-events', methods=['GET'])
def past_events():
    """Events of the last 18 months."""
    error = not_configured('Luma API key not configured', 'LUMA_API_KEY')
    if error:
        return error

    try:
        return jsonify(luma_service().past_events()), 200

    except Exception as e:
        logger.error(f"Error fetching past events from Luma: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch past events', 'details': str(e)}), 500


@app.route('/api/luma/upcoming-events', methods=['GET'])
def upcoming_events():
    """Events of the next 12 months."""
    error = not_configured('Luma API key not configured', 'LUMA_API_KEY')
    if error:
        return error

    try:
        return jsonify(luma_service().upcoming_events()), 200

    except Exception as e:
        logger.error(f"Error fetching upcoming events from Luma: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch upcoming events', 'details': str(e)}), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({'status': 'healthy'}), 200


@app.route('/', methods=['GET'])
def root():
    """Root endpoint."""
    return jsonify({
        'service': 'startup-community-api',
        'version': '1.0',
        'endpoints': {
            '/api/startups': 'GET - List startups',
            '/api/startups/<id>': 'GET, PUT, DELETE - Read, update or delete one startup',
            '/api/startups/add': 'POST - Create a startup',
            '/api/partners': 'GET - List shown partners',
            '/api/members': 'GET - List members',
            '/api/luma/past-events': 'GET - Events of the last 18 months',
            '/api/luma/upcoming-events': 'GET - Events of the next 12 months',
            '/health': 'GET - Health check'
        }
    }), 200


@app.cli.command('import-startups')
def import_startups_command():
    """Import StartupsList.csv into the NocoDB startups table."""
    missing = config.missing(*STARTUPS_SETTINGS)
    if missing:
        raise click.ClickException(f"Missing required configuration: {', '.join(missing)}")

    companies = csv_service().load_startups()
    result = startup_service().import_startups(companies)

    click.echo(f"Added {result['added']}, skipped {result['skipped']}, errors {result['errors']}")
    for detail in result['error_details']:
        click.echo(f"  - {detail}", err=True)


if __name__ == '__main__':
    import os
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port, debug=False)
