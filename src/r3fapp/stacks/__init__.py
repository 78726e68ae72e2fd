from r3fapp.stacks.next import STYLES, create_next

APP_TYPES = {"next": create_next}

__all__ = ["APP_TYPES", "STYLES", "create_next"]
