"""Shared test fixtures: a representative design-agent payload and its model."""
import copy
import datetime

import pytest

from shared.model import load_drawing_model

ISSUED = datetime.date(2025, 3, 14)

FICHA = {
    "titulo": "Tocador con espejo y cajones",
    "folio": "FNG-2025-0042",
    "planos": {
        "escala": "1:10",
        "unidades": "mm",
        "vistaFrontal": {
            "anchoTotal": 1200, "altoTotal": 1800,
            "elementos": [
                {"nombre": "Espejo", "x": 100, "y": 0, "ancho": 1000, "alto": 900, "tipo": "espejo"},
                {"nombre": "Cajón superior", "x": 0, "y": 1000, "ancho": 1200, "alto": 300, "tipo": "cajones"},
                {"nombre": "Cajón inferior", "x": 0, "y": 1300, "ancho": 1200, "alto": 400, "tipo": "cajones"},
                {"nombre": "Zoclo", "x": 0, "y": 1700, "ancho": 1200, "alto": 100, "tipo": "base"},
            ],
            "cotas": [
                {"tipo": "horizontal", "desde": 0, "hasta": 1200, "valor": "1200", "descripcion": "Ancho total"},
                {"tipo": "horizontal", "desde": 100, "hasta": 1100, "valor": "1000", "descripcion": ""},
                {"tipo": "vertical", "desde": 0, "hasta": 1800, "valor": "1800", "descripcion": "Alto total"},
            ],
        },
        "vistaLateral": {
            "anchoTotal": 500, "altoTotal": 1800,
            "elementos": [
                {"nombre": "Lateral", "x": 0, "y": 0, "ancho": 500, "alto": 1800, "tipo": "panel"},
            ],
            "cotas": [
                {"tipo": "horizontal", "desde": 0, "hasta": 500, "valor": "500", "descripcion": "Fondo"},
            ],
        },
        "vistaSuperior": {
            "anchoTotal": 1200, "altoTotal": 500,
            "elementos": [
                {"nombre": "Cubierta", "x": 0, "y": 0, "ancho": 1200, "alto": 500, "tipo": "panel"},
            ],
            "cotas": [
                {"tipo": "horizontal", "desde": 0, "hasta": 1200, "valor": "1200", "descripcion": ""},
                {"tipo": "vertical", "desde": 0, "hasta": 500, "valor": "500", "descripcion": ""},
            ],
        },
        "notas": [
            "Todas las medidas en milímetros",
            "Cantos en PVC 2 mm color roble",
            "Correderas de extensión total 450 mm",
        ],
    },
    "listaCortesDetallada": [
        {"pieza": "Panel lateral izq", "cantidad": 1, "largoMM": 1800, "anchoMM": 500, "espesorMM": 18,
         "material": "MDF 18 mm"},
        {"pieza": "Panel lateral der", "cantidad": 1, "largoMM": 1800, "anchoMM": 500, "espesorMM": 18,
         "material": "MDF 18 mm"},
        {"pieza": "Base inferior", "cantidad": 1, "largoMM": 1164, "anchoMM": 500, "espesorMM": 18,
         "material": "MDF 18 mm"},
        {"pieza": "Frente cajón", "cantidad": 2, "largoMM": 1196, "anchoMM": 296, "espesorMM": 18,
         "material": "MDF 18 mm", "observaciones": "Veta horizontal"},
        {"pieza": "Trasero", "cantidad": 1, "largoMM": 1164, "anchoMM": 1764, "espesorMM": 6,
         "material": "MDF 6 mm"},
    ],
    "piezasDetalladas": [
        {
            "pieza": "Panel lateral izq",
            "agujeros": [
                {"tipo": "bisagra", "diametro": 35, "profundidad": 12, "xMM": 100, "yMM": 22, "descripcion": "Cazoleta"},
                {"tipo": "sistema 32", "diametro": 5, "profundidad": 10, "xMM": 37, "yMM": 400, "descripcion": ""},
            ],
            "ranuras": [
                {"xMM": 0, "profundidadMM": 8, "anchoMM": 6, "longitudMM": 1800, "orientacion": "horizontal",
                 "descripcion": "Ranura para trasero"},
            ],
            "cantosAplicar": ["Canto frontal PVC 2 mm"],
            "direccionVeta": "longitudinal",
            "notasCorte": "Cortar con sierra de mesa",
        },
    ],
    "cortesTransversales": [
        {
            "id": "A-A", "nombre": "Unión lateral-base", "descripcion": "Corte por la unión inferior",
            "escala": "1:2", "plano": "A-A", "posicionMM": 900,
            "elementos": [
                {"nombre": "Lateral", "x": 0, "y": 0, "ancho": 18, "alto": 120, "tipo": "panel"},
                {"nombre": "Base", "x": 18, "y": 102, "ancho": 150, "alto": 18, "tipo": "base"},
            ],
            "cotas": [{"tipo": "horizontal", "desde": 0, "hasta": 18, "valor": "18", "descripcion": ""}],
            "notas": ["Pegamento PVA + 2 tornillos"],
        },
    ],
    "detallesConstructivos": [
        {
            "id": "D1", "tipo": "union", "nombre": "Espiga de madera",
            "descripcion": "Espiga 8 x 35 mm encolada",
            "herramientas": ["Taladro", "Broca 8 mm", "Prensa", "Martillo"],
            "tolerancia": "±0.5 mm",
            "elementos": [
                {"nombre": "Espiga", "x": 0, "y": 0, "ancho": 35, "alto": 8, "tipo": "union"},
            ],
            "cotas": [{"tipo": "horizontal", "desde": 0, "hasta": 35, "valor": "35", "descripcion": ""}],
        },
    ],
    "secuenciaEnsamble": [
        {"paso": 1, "operacion": "Ensamblar", "descripcion": "Unir panel lateral con la base",
         "herramientas": ["Taladro", "Desarmador"], "tiempoMin": 15},
        {"paso": 2, "operacion": "Colocar", "descripcion": "Fijar el trasero con clavos",
         "herramientas": ["Martillo"], "tiempoMin": 10},
        {"paso": 3, "operacion": "Revisar", "descripcion": "Verificar escuadra general",
         "herramientas": [], "tiempoMin": 5},
    ],
}


@pytest.fixture
def ficha():
    """Fresh copy of the representative payload, safe to mutate."""
    return copy.deepcopy(FICHA)


@pytest.fixture(scope="session")
def model():
    """DrawingModel of the representative payload with a pinned issue date."""
    return load_drawing_model(copy.deepcopy(FICHA), ISSUED)
