from django.apps import AppConfig


class OrdersConfig(AppConfig):
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.providers import get_event_bus

        # Builds the process-wide bus and subscribes the logging handlers.
        get_event_bus()
