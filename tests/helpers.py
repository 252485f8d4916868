import io


def order_form(**fields):
    """Formulario de pedido válido; un campo en None se omite"""
    data = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "details": "50 flyers, A5, full color",
    }
    data.update(fields)
    return {k: v for k, v in data.items() if v is not None}


def pdf_file(name="flyer.pdf", content=b"%PDF-1.4 test"):
    return (io.BytesIO(content), name)
