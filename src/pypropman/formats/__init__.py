# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/14 10:28:40
# @Author : Kariko Lin

from .ini import IniParser
from .xml import PropsXmlParser
from .yaml import PropsJsonParser, PropsYamlParser, to_document
