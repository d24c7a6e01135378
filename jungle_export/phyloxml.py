"""PhyloXML document: one phylogeny per track, one clade per spot."""

from lxml import etree

PHYLOXML_NS = "http://www.phyloxml.org"
PHYLOXML_SCHEMA = "http://www.phyloxml.org/1.10/phyloxml.xsd"
METAXML_NS = "http://13cflux.net/static/schemas/metaXML/2"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

# Branch lengths are not derived from the data yet
DEFAULT_BRANCH_LENGTH = "1.000000e+00"


def _q(tag, ns=PHYLOXML_NS):
    return f"{{{ns}}}{tag}"


class PhyloXMLBuilder:
    """Builds the ``<phyloxml>`` tree of one export run."""

    def __init__(self, project_name):
        self.root = etree.Element(
            _q("phyloxml"),
            nsmap={None: PHYLOXML_NS, "xsi": XSI_NS, "metaxml": METAXML_NS},
        )
        self.root.set(_q("schemaLocation", XSI_NS), f"{PHYLOXML_NS} {PHYLOXML_SCHEMA}")
        etree.SubElement(self.root, _q("projectName", METAXML_NS)).text = project_name

    def clade(self, name):
        """Return a detached ``<clade>`` carrying ``name`` and the default branch length."""
        clade = etree.Element(_q("clade"))
        etree.SubElement(clade, _q("name")).text = name
        etree.SubElement(clade, _q("branch_length")).text = DEFAULT_BRANCH_LENGTH
        return clade

    def add_phylogeny(self, track_id, clade):
        phylogeny = etree.SubElement(self.root, _q("phylogeny"))
        etree.SubElement(phylogeny, _q("id")).text = str(track_id)
        phylogeny.append(clade)
        return phylogeny
