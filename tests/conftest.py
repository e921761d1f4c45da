import os
import sys

import pytest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, project_root)


MODEL_SVGNODE = (
    'SVGNODE~{"gId":"g1_outline","nodeName":"g","nodeType":1,"layerid":"19",'
    '"attrs":{"c_width":"6.3","c_height":"3.2","c_rotation":"0,0,0","z":"0",'
    '"c_origin":"4000,3000","uuid":"8f3c2a9e","title":"R0603_L1.6-W0.8-H0.5",'
    '"layerid":"19","transform":"scale(1) translate(0, 0)"},"childNodes":[]}'
)

SYMBOL_SHAPES = [
    "R~340~270~~~30~40~#880000~1~0~none~gge2~0~",
    "P~show~1~1~330~290~180~gge5~0^^330~290^^M 330 290 h 10~#880000"
    "^^1~343.7~294~0~IN~start~~~#0000FF^^1~339.5~289~0~1~end~~~#0000FF"
    "^^0~337~290^^0~M 340 293 L 343 290 L 340 287",
    "P~show~4~2~380~290~0~gge11~0^^380~290^^M 380 290 h -10~#880000"
    "^^1~366.3~294~0~VCC~end~~~#0000FF^^1~370.5~289~0~2~start~~~#0000FF"
    "^^0~373~290^^0~M 370 287 L 367 290 L 370 293",
    "T~L~350~300~0~#000080~Arial~~~~~comment~R1~1~start~gge20~0~pinpart",
]

FOOTPRINT_SHAPES = [
    "PAD~RECT~3990~3000~6~3~1~~1~0~3987 2998.5 3993 2998.5 3993 3001.5 3987 3001.5~0~gge5~0~~Y~0~0~0.4~3990,3000",
    "PAD~RECT~4010~3000~6~3~1~~2~0~4007 2998.5 4013 2998.5 4013 3001.5 4007 3001.5~0~gge6~0~~Y~0~0~0.4~4010,3000",
    "TRACK~0.6~3~~3984 2996 4016 2996~gge7~0",
    "TRACK~0.6~1~~3990 3000 4010 3000~gge8~0",
    "TEXT~N~4000~2990~0.6~0~0~3~~4.5~R1~M 3990 2990 L 3995 2985~~gge9~0~pinpart",
    "TEXT~P~4000~3010~0.6~0~0~3~~4.5~0603~M 3990 3010 L 3995 3005~~gge10~0~pinpart",
    "CIRCLE~3985~3004~0.5~0.2~3~gge11~0~~",
    "ARC~0.6~3~~M 3984 2996 A 5 5 0 0 1 3984 3004~~gge12~0",
    "SOLIDREGION~99~~M 3980 2990 L 4020 2990 L 4020 3010 Z~solid~gge13~~~~0",
    MODEL_SVGNODE,
]


@pytest.fixture
def symbol_shapes():
    return list(SYMBOL_SHAPES)


@pytest.fixture
def cad_data():
    """A trimmed-down component payload as returned by the EasyEDA API (``result``)."""
    return {
        "uuid": "2d4b0c6e",
        "title": "0603WAF1002T5E",
        "lcsc": {"id": 25804, "number": "C25804", "url": "https://lcsc.com/product-detail/C25804.html"},
        "dataStr": {
            "head": {
                "x": "350",
                "y": "290",
                "c_para": {
                    "pre": "R?",
                    "name": "0603WAF1002T5E",
                    "package": "R0603",
                    "JLCPCB Part Class": "Basic Part",
                },
            },
            "shape": list(SYMBOL_SHAPES),
        },
        "packageDetail": {
            "title": "R0603",
            "dataStr": {
                "head": {"x": 4000, "y": 3000, "c_para": {"package": "R0603"}},
                "shape": list(FOOTPRINT_SHAPES),
            },
        },
    }
