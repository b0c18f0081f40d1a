import logging

from django.apps import AppConfig
from django.conf import settings


class GalleryConfig(AppConfig):
    name = 'gallery'
    _store_prepared = False

    def ready(self) -> None:
        super().ready()
        if not settings.WILDLIGHT_PREPARE_STORE or GalleryConfig._store_prepared:
            return
        GalleryConfig._store_prepared = True

        from .services import prepare_store

        # Directory failures raise ImproperlyConfigured and stop the process
        prepare_store()
        logging.getLogger(__name__).debug("Store ready at %s", settings.WILDLIGHT_DATA_DIR)
