from django.conf import settings


def is_production() -> bool:
    return (settings.BPJS_ENV or '').lower() == 'production'


def is_configured() -> bool:
    """Integration enabled and all consumer credentials present."""
    return bool(
        settings.BPJS_ENABLE
        and settings.BPJS_CONS_ID
        and settings.BPJS_CONS_SECRET
        and settings.BPJS_USER_KEY
    )


def summary() -> dict:
    return {
        'enabled': bool(settings.BPJS_ENABLE),
        'configured': is_configured(),
        'environment': 'production' if is_production() else 'development',
        'maxOutput': settings.BPJS_LZSTRING_MAX_OUTPUT,
    }
