from fastapi import Depends, Request

from .container import ApplicationContainer


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Application container not initialised.")
    return container


def get_identity_resolver(container: ApplicationContainer = Depends(get_container)):
    return container.identity_resolver


def get_checkout_service(container: ApplicationContainer = Depends(get_container)):
    return container.checkout_service


def get_webhook_processor(container: ApplicationContainer = Depends(get_container)):
    return container.webhook_processor


def get_subscription_service(container: ApplicationContainer = Depends(get_container)):
    return container.subscription_service
