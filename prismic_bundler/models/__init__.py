from .prismic import ContentType, ContentTypeHook, ExternalLink, FieldSpec, MediaOrigin, MediaRef

__all__ = ["ContentType", "ContentTypeHook", "ExternalLink", "FieldSpec", "MediaOrigin", "MediaRef"]
