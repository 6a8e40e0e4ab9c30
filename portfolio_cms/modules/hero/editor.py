"""
Hero Editor
===========

The singleton profile row: name, roles, description, links, and the
uploaded profile image and resume.
"""

import json
import logging

from ...core.config import get_config_value
from ...core.data_service import DataServiceError
from ...core.notifications import Notifications
from ...core.storage import upload_file

logger = logging.getLogger(__name__)

HERO_FIELDS = ['name', 'role', 'description', 'linkedin_url', 'email', 'resume', 'profile_image']


def empty_hero():
    hero = {name: '' for name in HERO_FIELDS}
    hero['role'] = []
    return hero


def parse_roles(value):
    """Roles are stored as an array but may arrive as a JSON string or as
    newline separated text from the form"""
    if isinstance(value, (list, tuple)):
        return [str(role).strip() for role in value if str(role).strip()]
    if not value:
        return []
    text = str(value).strip()
    if text.startswith('['):
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None
        if isinstance(decoded, list):
            return parse_roles(decoded)
    return [line.strip() for line in text.splitlines() if line.strip()]


class HeroEditor:
    """Load and save the hero row, uploading new assets first"""

    def __init__(self, data_service, notifier=None, table=None):
        self.data_service = data_service
        self.notifier = notifier or Notifications()
        self.table = table or get_config_value('HERO_TABLE', 'hero')
        self.hero = empty_hero()
        self.loaded = False
        self.load_error = None

    def load(self):
        try:
            row = self.data_service.single(self.table)
        except DataServiceError as e:
            logger.error("Error fetching hero data: %s", e)
            self.load_error = e
            self.notifier.error("Failed to fetch hero data")
            return False
        finally:
            self.loaded = True

        hero = empty_hero()
        hero.update(row)
        hero['role'] = parse_roles(hero.get('role'))
        self.hero = hero
        return True

    def update_fields(self, values):
        """Apply submitted form values to local state"""
        for name, value in values.items():
            if name not in HERO_FIELDS:
                continue
            self.hero[name] = parse_roles(value) if name == 'role' else value

    def save(self, profile_file=None, resume_file=None):
        """Upload any new files, then write the hero row.

        `profile_file` / `resume_file` are (filename, bytes) tuples.
        """
        profile_image_url = self.hero.get('profile_image')
        resume_url = self.hero.get('resume')

        try:
            if profile_file:
                profile_image_url = upload_file(profile_file[1], profile_file[0], 'profile')
            if resume_file:
                resume_url = upload_file(resume_file[1], resume_file[0], 'resume')
        except DataServiceError as e:
            logger.error("Hero upload failed: %s", e)
            self.notifier.error(f"Upload failed: {e.message}")
            return False

        updated = dict(self.hero)
        updated['role'] = parse_roles(updated.get('role'))
        updated['profile_image'] = profile_image_url
        updated['resume'] = resume_url

        try:
            self.data_service.upsert(self.table, [updated])
        except DataServiceError as e:
            logger.error("Hero update error: %s", e)
            self.notifier.error("Failed to update hero data")
            return False

        self.hero = updated
        self.notifier.success("Hero section updated successfully")
        return True

    @property
    def backend_unreachable(self):
        """The last load failed before the backend answered (no HTTP status)"""
        return self.load_error is not None and self.load_error.status_code is None
