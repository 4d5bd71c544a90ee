from channel_service.main import run

run()
