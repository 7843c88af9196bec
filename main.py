from clinic_api.app_factory import create_app


if __name__ == "__main__":
    """
    Dedicated entrypoint for the clinic API.
    Dashboards talk to it through clinic_api.client.ClinicApiClient.
    """
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config.get("DEBUG", False))
