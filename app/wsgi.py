from app.campushub import create_app

app = create_app()
