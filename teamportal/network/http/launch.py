from teamportal import setup

setup.run()

from teamportal.network.http.server import server as http_server  # noqa: E402

# Booted with `uvicorn teamportal.network.http.launch:server`
server = http_server
