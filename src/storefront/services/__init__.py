"""Services wrapped by the API routers."""

from storefront.services.media import FileUpload, MediaService

__all__ = ["FileUpload", "MediaService"]
