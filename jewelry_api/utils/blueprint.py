# jewelry_api/utils/blueprint.py
from flask_smorest import Blueprint as BaseBlueprint
from webargs.flaskparser import FlaskParser


class Parser(FlaskParser):
    # invalid request bodies are a 400, not webargs' default 422
    DEFAULT_VALIDATION_STATUS = 400


class Blueprint(BaseBlueprint):
    ARGUMENTS_PARSER = Parser()
