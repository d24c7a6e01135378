"""
Export a TrackMate model to a PhyloXML / MetaXML pair.

Both documents are produced by a single depth-first walk over each
visible track. Every spot visited becomes a clade in the phyloXML and a
cell in the metaXML; the two share the identifier handed out by the
session's ``IdentifierRegistry``.
"""

from pathlib import Path

from .config import ExportSettings
from .errors import EmptyModelError, GraphCycleDetected
from .io import write_document
from .log import get_logger
from .metaxml import MetaXMLBuilder
from .phyloxml import PhyloXMLBuilder
from .registry import IdentifierRegistry

logger = get_logger(__name__)

DEFAULT_TREE_FILENAME = "tree.xml"
META_SUFFIX = "_meta.xml"


class ExportSession:
    """
    State of one export run.

    Holds the identifier registry and both document builders. A session
    must not be reused: create a new one for every export.
    """

    def __init__(self, model, settings):
        self.model = model
        self.settings = settings
        self.registry = IdentifierRegistry()
        self.phylo = PhyloXMLBuilder(settings.project_name)
        self.meta = MetaXMLBuilder(
            model,
            settings.project_name,
            settings.interval,
            self.registry,
            population_scope=settings.population_scope,
        )

    def assemble(self):
        """
        Build both documents.

        Returns
        -------
        (phylo_root, meta_root) : tuple of lxml elements

        Raises
        ------
        EmptyModelError
            If the model has no visible track.
        """
        track_ids = self.model.track_ids(visible_only=True)
        if not track_ids:
            raise EmptyModelError("No visible track found")

        for track_id in track_ids:
            first = self.model.earliest_spot(self.model.track_spots(track_id))
            graph = self.model.track_graph(first)
            clade = self.build_clade(first, graph)
            self.phylo.add_phylogeny(track_id, clade)
            logger.debug("Track %s: %d spots exported so far", track_id, len(self.registry))

        return self.phylo.root, self.meta.root

    def _visit(self, spot):
        first_visit = spot not in self.registry
        identifier = self.registry.identifier_for(spot)
        clade = self.phylo.clade(identifier)
        # a spot reached again through a merge keeps its single cell record
        if first_visit:
            cell = self.meta.cell_record_for(spot, identifier)
            self.meta.frame_element_for(spot).append(cell)
        return clade

    def build_clade(self, spot, graph):
        """
        Return the clade of ``spot`` with all its descendants nested.

        Children follow the graph's edge order. Only edges leaving a spot
        are followed; reaching a spot that is already on the current path
        raises ``GraphCycleDetected``.
        """
        root_clade = self._visit(spot)
        on_path = {spot}
        stack = [(spot, root_clade, iter(list(graph.out_edges(spot))))]
        while stack:
            parent, parent_clade, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                stack.pop()
                on_path.discard(parent)
                continue

            _, child = edge
            if child in on_path:
                raise GraphCycleDetected(child.name)
            child_clade = self._visit(child)
            parent_clade.append(child_clade)
            on_path.add(child)
            stack.append((child, child_clade, iter(list(graph.out_edges(child)))))

        return root_clade


def marshall_model(model, settings):
    """Build the (phyloXML, metaXML) roots for ``model`` in a fresh session."""
    return ExportSession(model, settings).assemble()


def output_paths(model, settings):
    """
    Where the two documents of ``model`` go.

    The phyloXML is named after the image (``tree.xml`` without one); the
    metaXML sits next to it with a ``_meta.xml`` suffix.
    """
    folder = settings.destination
    if folder is None:
        image_folder = Path(model.image_folder) if model.image_folder else None
        folder = image_folder if image_folder is not None and image_folder.exists() else Path.cwd()
    folder = Path(folder)

    if model.image_filename:
        phylo_path = folder / f"{Path(model.image_filename).stem}.xml"
    else:
        phylo_path = folder / DEFAULT_TREE_FILENAME
    meta_path = phylo_path.with_name(phylo_path.stem + META_SUFFIX)
    return phylo_path, meta_path


def export_model(model, settings=None):
    """
    Export ``model`` and write both documents.

    Parameters
    ----------
    model : TrackModel
    settings : ExportSettings, optional
        Defaults to ``ExportSettings()``.

    Returns
    -------
    (phylo_path, meta_path) or None
        ``None`` when there is no visible track; nothing is written then.

    Raises
    ------
    DocumentWriteError
        If a document cannot be written. The phyloXML is written first and
        stays in place when the metaXML fails.
    """
    if settings is None:
        settings = ExportSettings()
    logger.info("Exporting project '%s' to PhyloXML/MetaXML", settings.project_name)

    try:
        logger.info("Preparing XML data")
        phylo_root, meta_root = marshall_model(model, settings)
    except EmptyModelError:
        logger.warning("No visible track found. Aborting.")
        return None

    phylo_path, meta_path = output_paths(model, settings)
    write_document(phylo_root, phylo_path, document="phyloXML")
    write_document(meta_root, meta_path, document="metaXML")
    logger.info("Done.")
    return phylo_path, meta_path
