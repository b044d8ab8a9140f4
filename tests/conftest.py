"""Shared fixtures: a small five-person GEDCOM tree and its converted people."""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from gedgraph.assembler import parse_gedcom_content
from gedgraph.converter import convert_to_people


SAMPLE_GEDCOM = """0 HEAD
1 SOUR SampleGEDCOM
1 VERS 5.5.1
1 CHAR UTF-8
0 @I1@ INDI
1 NAME Pierre /Delpech/
1 SEX M
1 BIRT
2 DATE 10 MAY 1760
2 PLAC Provence, France
1 DEAT
2 DATE 20 MAR 1835
2 PLAC Provence, France
1 OCCU Farmer
1 FAMS @F1@
0 @I2@ INDI
1 NAME Marguerite /Blanc/
1 SEX F
1 BIRT
2 DATE 15 AUG 1765
2 PLAC Provence, France
1 FAMS @F1@
0 @I3@ INDI
1 NAME Marie-Antoinette /Delpech/
1 SEX F
1 FAMC @F1@
1 FAMS @F2@
0 @I4@ INDI
1 NAME Antoine /Grognier/
1 SEX M
1 FAMS @F2@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
1 MARR
2 DATE 1785
0 @F2@ FAM
1 HUSB @I4@
1 WIFE @I3@
1 CHIL @I5@
0 @I5@ INDI
1 NAME Louise /Grognier/
1 SEX F
1 FAMC @F2@
0 TRLR
"""


@pytest.fixture
def sample_gedcom():
    return SAMPLE_GEDCOM


@pytest.fixture
def parse_result():
    return parse_gedcom_content(SAMPLE_GEDCOM)


@pytest.fixture
def people(parse_result):
    return convert_to_people(parse_result)


@pytest.fixture
def people_by_id(people):
    return {p.id: p for p in people}
