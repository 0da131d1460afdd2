import argparse
import logging
import os
import sys
from pathlib import Path

from bliphelper import defaultlogging
from bliphelper.blip import Blip, BlipConfig, BlipError, BlipResponse, LocationOptions
from bliphelper.blip.BlipConfig import DEFAULT_ENDPOINT
from bliphelper.bulkload import BulkLoadRequest

log = defaultlogging.setup_logging(logging.INFO)


def create_client(args: argparse.Namespace) -> Blip:
    """ Secrets mounted as files take precedence over the command line and environment """
    if args.secrets_directory:
        config = BlipConfig.from_secret_directory(args.secrets_directory)
    else:
        config = BlipConfig(api_key=args.api_key, secret_key=args.secret_key, endpoint=args.endpoint)
    return Blip(config)


def ping_operation(args: argparse.Namespace) -> BlipResponse:
    return create_client(args).ping()


def brands_operation(args: argparse.Namespace) -> BlipResponse:
    return create_client(args).get_brand_keys()


def sources_operation(args: argparse.Namespace) -> BlipResponse:
    return create_client(args).get_brand_sources(args.brand)


def projections_operation(args: argparse.Namespace) -> BlipResponse:
    return create_client(args).get_brand_projections(args.brand)


def locationkeys_operation(args: argparse.Namespace) -> BlipResponse:
    return create_client(args).get_location_keys(args.brand, args.projection)


def location_operation(args: argparse.Namespace) -> BlipResponse:
    options = LocationOptions(projection=args.projection, include_refs=args.include_refs)
    return create_client(args).get_location(args.brand, args.location, options)


def querylocations_operation(args: argparse.Namespace) -> BlipResponse:
    return create_client(args).query_locations(args.brand, args.query, args.view)


def putlocation_operation(args: argparse.Namespace) -> BlipResponse:
    location_data = Path(args.data_file).read_text(encoding="utf-8")
    return create_client(args).put_location(args.brand, args.location, args.source, location_data)


def deletelocation_operation(args: argparse.Namespace) -> BlipResponse:
    return create_client(args).delete_location(args.brand, args.location, args.source)


def bulkload_operation(args: argparse.Namespace) -> BlipResponse:
    bulk_request = BulkLoadRequest(brand_key=args.brand,
                                   source=args.source,
                                   file_path=args.file,
                                   implicit_delete=args.implicit_delete,
                                   expected_record_count=args.expected_record_count,
                                   success_email=args.success_email,
                                   fail_email=args.fail_email,
                                   success_callback=args.success_callback,
                                   fail_callback=args.fail_callback)
    return create_client(args).bulk_load(bulk_request)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Command line client for the BLIP location data API")
    parser.add_argument("--api_key", type=str, default=os.getenv("BLIP_API_KEY", ""), help="BLIP API key, defaults to $BLIP_API_KEY")
    parser.add_argument("--secret_key", type=str, default=os.getenv("BLIP_SECRET_KEY", ""), help="BLIP secret key, defaults to $BLIP_SECRET_KEY")
    parser.add_argument("--endpoint", type=str, default=os.getenv("BLIP_ENDPOINT", DEFAULT_ENDPOINT), help="BLIP endpoint, defaults to $BLIP_ENDPOINT")
    parser.add_argument("--secrets_directory", type=Path, required=False, help="Directory with the files api_key, secret_key and optionally endpoint, overrides the other credential options")
    parser.add_argument("--verbose", action="store_true", help="Log every HTTP request, including the connection handling of requests")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    ping = subparsers.add_parser("ping", help="Check the BLIP API is reachable with the given credentials")
    ping.set_defaults(func=ping_operation)

    brands = subparsers.add_parser("brands", help="List the brandKeys the API user has access to")
    brands.set_defaults(func=brands_operation)

    sources = subparsers.add_parser("sources", help="List the data sources of a brand")
    sources.add_argument("--brand", type=str, required=True, help="Brand key")
    sources.set_defaults(func=sources_operation)

    projections = subparsers.add_parser("projections", help="List the data projections of a brand")
    projections.add_argument("--brand", type=str, required=True, help="Brand key")
    projections.set_defaults(func=projections_operation)

    locationkeys = subparsers.add_parser("locationkeys", help="List the locationKeys of a brand")
    locationkeys.add_argument("--brand", type=str, required=True, help="Brand key")
    locationkeys.add_argument("--projection", type=str, required=False, default="universal", help="Data projection to filter on")
    locationkeys.set_defaults(func=locationkeys_operation)

    location = subparsers.add_parser("location", help="Get the data of a single location")
    location.add_argument("--brand", type=str, required=True, help="Brand key")
    location.add_argument("--location", type=str, required=True, help="Location key")
    location.add_argument("--projection", type=str, required=False, default="universal", help="Data projection to filter on")
    location.add_argument("--include_refs", action="store_true", help="Include the objects referenced by the location")
    location.set_defaults(func=location_operation)

    querylocations = subparsers.add_parser("querylocations", help="Get the locations matching a BLIP query")
    querylocations.add_argument("--brand", type=str, required=True, help="Brand key")
    querylocations.add_argument("--query", type=str, required=True, help="BLIP query as JSON, e.g. {\"address.city\": \"Boise\"}")
    querylocations.add_argument("--view", type=str, required=False, default="full", help="Name of the view to return")
    querylocations.set_defaults(func=querylocations_operation)

    putlocation = subparsers.add_parser("putlocation", help="Add or update a location")
    putlocation.add_argument("--brand", type=str, required=True, help="Brand key")
    putlocation.add_argument("--location", type=str, required=True, help="Location key")
    putlocation.add_argument("--source", type=str, required=True, help="Data source the location is written for")
    putlocation.add_argument("--data_file", type=Path, required=True, help="File containing the JSON location document")
    putlocation.set_defaults(func=putlocation_operation)

    deletelocation = subparsers.add_parser("deletelocation", help="Delete a location")
    deletelocation.add_argument("--brand", type=str, required=True, help="Brand key")
    deletelocation.add_argument("--location", type=str, required=True, help="Location key")
    deletelocation.add_argument("--source", type=str, required=True, help="Data source the location is deleted for")
    deletelocation.set_defaults(func=deletelocation_operation)

    bulkload = subparsers.add_parser("bulkload", help="Upload a location file and load it into a brand")
    bulkload.add_argument("--brand", type=str, required=True, help="Brand key")
    bulkload.add_argument("--source", type=str, required=True, help="Data source the locations are loaded for")
    bulkload.add_argument("--file", type=Path, required=True, help="Location file to upload, it is gzipped before uploading")
    bulkload.add_argument("--implicit_delete", action="store_true", help="Delete the locations of the source that are not in the file")
    bulkload.add_argument("--expected_record_count", type=int, required=False, default=0, help="Number of locations in the file")
    bulkload.add_argument("--success_email", type=str, required=False, help="Comma separated email addresses to notify when the load succeeds")
    bulkload.add_argument("--fail_email", type=str, required=False, help="Comma separated email addresses to notify when the load fails")
    bulkload.add_argument("--success_callback", type=str, required=False, help="http(s) URL called when the load succeeds")
    bulkload.add_argument("--fail_callback", type=str, required=False, help="http(s) URL called when the load fails")
    bulkload.set_defaults(func=bulkload_operation)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    if args.verbose:
        defaultlogging.setup_logging(logging.DEBUG)

    if not args.command:
        parser.print_help()
        return

    try:
        response: BlipResponse = args.func(args)
    except (BlipError, ValueError, OSError) as e:
        log.error(f"{args.command} failed: {e}")
        sys.exit(1)

    print(response.body)
    if not response.is_success:
        log.error(f"{args.command} failed with status code {response.status_code}")
        sys.exit(1)


if __name__ == "__main__":
    main()
