import typer
from typing import Optional
from typing_extensions import Annotated

from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv(usecwd=True))

app = typer.Typer(
    help="crd-manager: install the bundled CRDs into a Kubernetes cluster",
    add_completion=False,
)


@app.command("deploy")
def deploy(
    bundle: Annotated[
        Optional[str], typer.Option("-b", "--bundle", help="CRD bundle to apply")
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="Log level (default LOG_LEVEL or INFO)")
    ] = None,
    kubeconfig: Annotated[
        Optional[str], typer.Option("--kubeconfig", help="Path to a kubeconfig file")
    ] = None,
    context: Annotated[
        Optional[str], typer.Option("--context", help="Kubeconfig context to use")
    ] = None,
):
    """Create or update every CRD in the bundle (connects to cluster)."""
    from crd_manager.main import configure_logging, run

    configure_logging(log_level)
    exit_code = run(bundle_path=bundle, kubeconfig=kubeconfig, context=context)
    if exit_code:
        raise typer.Exit(exit_code)


@app.command("validate-bundle")
def validate_bundle(
    bundle: Annotated[
        Optional[str], typer.Option("-b", "--bundle", help="CRD bundle to check")
    ] = None,
):
    """Split and decode the bundle without touching the cluster."""
    from crd_manager.crd.bundle import decode_document, get_crd_yaml, split_bundle
    from crd_manager.errors import CRDManagerError, DecodeError

    try:
        documents = list(split_bundle(get_crd_yaml(bundle)))
    except CRDManagerError as e:
        typer.echo(f"Invalid bundle: {e}")
        raise typer.Exit(1)

    failed = 0
    for index, document in enumerate(documents):
        try:
            obj = decode_document(document)
        except DecodeError as e:
            typer.echo(f"  #{index}: invalid ({e})")
            failed += 1
            continue
        typer.echo(f"  #{index}: {obj.kind} {obj.name}")

    typer.echo(f"Validated {len(documents) - failed}/{len(documents)} documents")
    if failed:
        raise typer.Exit(1)
