from traintracker_api.routes.prices import router as prices_router

__all__ = ["prices_router"]
