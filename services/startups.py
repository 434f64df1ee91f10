"""Startup record operations backed by the NocoDB startups table."""
import logging
import time
from typing import Any, Dict, Iterable, List, Optional

from core.images import decode_data_uri, is_data_uri, is_hosted_url
from core.transform import company_to_startup_record, form_to_startup_record, transform_startup_record
from models import Company
from services.nocodb import NocoDBService

logger = logging.getLogger(__name__)


class StartupService:
    """Create, read, update and delete startups in NocoDB."""

    # Form field -> (NocoDB attachment column, uploaded filename prefix)
    IMAGE_FIELDS = {
        'companyLogo': ('Company Logo', 'logo'),
        'memberPicture': ('Member Picture', 'member'),
    }

    def __init__(self, nocodb: NocoDBService, table_id: str, base_url: str):
        self.nocodb = nocodb
        self.table_id = table_id
        self.base_url = base_url

    def list_startups(self) -> List[Company]:
        records = self.nocodb.list_records(self.table_id)
        companies = [transform_startup_record(record, self.base_url) for record in records]
        logger.info(f"Fetched {len(companies)} startups from NocoDB")
        return companies

    def get_startup(self, record_id: Any) -> Company:
        record = self.nocodb.get_record(self.table_id, record_id)
        return transform_startup_record(record, self.base_url)

    def upload_image(self, data_uri: str, prefix: str) -> Optional[List[Dict[str, Any]]]:
        """Upload a base64 image from the admin form.

        Returns:
            The NocoDB attachment descriptor, or None if the payload was
            malformed or the upload failed
        """
        try:
            mime_type, content, extension = decode_data_uri(data_uri)
            filename = f"{prefix}_{int(time.time() * 1000)}.{extension}"
            return self.nocodb.upload_file(filename, content, mime_type)
        except Exception as e:
            logger.warning(f"Error uploading {prefix} image: {e}")
            return None

    def create_startup(self, form: Dict[str, Any]) -> Dict[str, Any]:
        """Create a startup from the admin form.

        A failed image upload leaves that attachment column empty; the record
        is still created.
        """
        images = {}
        for field, (column, prefix) in self.IMAGE_FIELDS.items():
            value = form.get(field)
            if is_data_uri(value):
                images[field] = self.upload_image(value, prefix)
            else:
                images[field] = None

        fields = form_to_startup_record(form, company_logo=images['companyLogo'],
                                        member_picture=images['memberPicture'])
        result = self.nocodb.create_record(self.table_id, fields)
        record_id = result.get('Id') or result.get('id')

        logger.info(f"Added startup '{form.get('startupName')}' as record {record_id}")
        return {
            'success': True,
            'message': 'Startup added successfully',
            'data': result,
            'recordId': record_id
        }

    def _resolve_image(self, value: Any, existing: Any, prefix: str) -> Any:
        if is_data_uri(value):
            uploaded = self.upload_image(value, prefix)
            if uploaded is not None:
                return uploaded
            logger.warning(f"Keeping existing {prefix} image after failed upload")
            return existing
        if is_hosted_url(value):
            return existing
        return None

    def update_startup(self, record_id: Any, form: Dict[str, Any]) -> Dict[str, Any]:
        """Update a startup from the admin form.

        The current record is read first: an image field that still holds the
        hosted URL shown in the form keeps the stored attachment untouched, a
        fresh base64 image replaces it and an empty field clears it.
        """
        current = self.nocodb.get_record(self.table_id, record_id)

        images = {}
        for field, (column, prefix) in self.IMAGE_FIELDS.items():
            images[field] = self._resolve_image(form.get(field), current.get(column), prefix)

        fields = form_to_startup_record(form, company_logo=images['companyLogo'],
                                        member_picture=images['memberPicture'])
        result = self.nocodb.update_record(self.table_id, record_id, fields)

        logger.info(f"Updated startup record {record_id}")
        return {
            'success': True,
            'message': 'Startup updated successfully',
            'data': result
        }

    def delete_startup(self, record_id: Any) -> Dict[str, Any]:
        # Uploaded attachments stay in NocoDB storage
        self.nocodb.delete_record(self.table_id, record_id)
        logger.info(f"Deleted startup record {record_id}")
        return {
            'success': True,
            'message': 'Startup deleted successfully'
        }

    def import_startups(self, companies: Iterable[Company]) -> Dict[str, Any]:
        """Import CSV-sourced startups, skipping names NocoDB already has.

        Args:
            companies: Companies parsed from the startups CSV

        Returns:
            Dict with 'added', 'skipped' and 'errors' counts plus error details
        """
        existing = {company.name_key for company in self.list_startups()}
        results = {'added': [], 'skipped': [], 'errors': []}

        for company in companies:
            if company.name_key in existing:
                results['skipped'].append(company.name)
                continue
            try:
                self.nocodb.create_record(self.table_id, company_to_startup_record(company))
                existing.add(company.name_key)
                results['added'].append(company.name)
            except Exception as e:
                logger.error(f"Failed to import {company.name}: {e}")
                results['errors'].append(f"{company.name}: {e}")

        logger.info(f"Startup import complete: {len(results['added'])} added, "
                    f"{len(results['skipped'])} skipped, {len(results['errors'])} errors")

        return {
            'success': not results['errors'],
            'added': len(results['added']),
            'skipped': len(results['skipped']),
            'errors': len(results['errors']),
            'added_companies': results['added'],
            'error_details': results['errors']
        }
