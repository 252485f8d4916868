from flask import Blueprint, current_app, send_from_directory

files_bp = Blueprint("files", __name__)


@files_bp.get("/uploads/<path:filename>")
def uploaded_file(filename: str):
    # send_from_directory responde 404 si no existe o si la ruta sale del directorio
    return send_from_directory(current_app.config["UPLOAD_DIR"], filename)
