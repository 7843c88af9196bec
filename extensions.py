from flask_cors import CORS

from clinic_api.services.repository import RepositoryStore

# Initialized against the app in create_app(), like any Flask extension.
store = RepositoryStore()
cors = CORS()
