from pricing_api.main import app  # re-export the FastAPI instance
