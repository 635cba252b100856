from creatorhub.main import create_application

app = create_application()
