#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ContigWeaver.

This module provides the main CLI entry point and all subcommands for
building overlap graphs from reads and enumerating their contigs.
"""

import logging
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import load_config, merge_overrides, save_config_template, validate_config

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ContigWeaver: de Bruijn graph contig reconstruction

    Builds an overlap multigraph from short reads and enumerates every
    distinct contig it encodes, including cyclic and branching paths.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


def _configure_logging(ctx, config):
    """Set up root logging from CLI flags and the config's output.logging section."""
    log_config = config.get('output', {}).get('logging', {})
    level = str(log_config.get('level', 'INFO')).upper()
    if ctx.obj.get('VERBOSE'):
        level = 'DEBUG'
    elif ctx.obj.get('QUIET'):
        level = 'ERROR'

    handlers = [logging.StreamHandler()]
    if log_config.get('log_file'):
        handlers.append(logging.FileHandler(log_config['log_file']))

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        handlers=handlers,
        force=True,
    )


def _load_checked_config(config_file, overrides):
    """Load, override and validate configuration; exit(1) on errors."""
    config = load_config(Path(config_file) if config_file else None)
    config = merge_overrides(config, overrides)

    errors = validate_config(config)
    if errors:
        click.echo("✗ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    return config


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='contigweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t',
              type=click.Choice(['default', 'small', 'dense']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
        click.echo(f"✓ Configuration file created: {output}")
    except Exception as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
        errors = validate_config(config)
    except Exception as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  k-mer size: {config['assembly']['kmer_size']}")
    click.echo(f"  Path ceiling: {config['assembly']['max_paths'] or 'unbounded'}")
    click.echo(f"  Streaming: {'ENABLED' if config['streaming']['enabled'] else 'DISABLED'}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except Exception as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    click.echo("\nAssembly:")
    click.echo(f"  k-mer size: {config['assembly']['kmer_size']}")
    click.echo(f"  Path ceiling: {config['assembly']['max_paths'] or 'unbounded'}")

    click.echo("\nStreaming:")
    click.echo(f"  Enabled: {config['streaming']['enabled']}")
    click.echo(f"  Queue size: {config['streaming']['queue_size'] or 'unbounded'}")

    sim = config['simulation']
    click.echo("\nSimulation:")
    click.echo(f"  Genome length: {sim['genome_length']}")
    click.echo(f"  Reads: {sim['num_reads']} (min length {sim['min_read_length']}, "
               f"{sim['noise_reads']} noise)")

    click.echo("\nOutput:")
    click.echo(f"  Format: {config['output']['format']}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")


# ============================================================================
# Assembly Commands
# ============================================================================

@main.command()
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True),
              help='Reads file (FASTA, FASTQ or one read per line)')
@click.option('--kmer-size', '-k', type=int, default=None,
              help='k-mer size (default from config)')
@click.option('--output', '-o', type=click.Path(),
              help='Output file for contigs (default: print to stdout)')
@click.option('--format', '-f', 'output_format', type=click.Choice(['fasta', 'text']),
              default=None, help='Output format for --output')
@click.option('--stream', is_flag=True,
              help='Print contigs as they are discovered instead of at the end')
@click.option('--max-paths', type=int, default=None,
              help='Stop enumeration after this many paths')
@click.option('--no-path-limit', is_flag=True,
              help='Enumerate every path, ignoring max_paths from the config')
@click.option('--stats', 'stats_file', type=click.Path(),
              help='Write assembly statistics JSON to this file')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.pass_context
def assemble(ctx, input_file, kmer_size, output, output_format, stream, max_paths,
             no_path_limit, stats_file, config_file):
    """Assemble contigs from reads by exhaustive overlap graph traversal."""
    from .assembly_core.contig_collector import ContigCollector, get_contigs
    from .assembly_core.contig_stream_module import ChannelFailed, ContigFound, ContigWorker
    from .assembly_core.dbg_engine_module import OverlapGraphBuilder
    from .io.io_core_module import read_sequences
    from .io_utils.assembly_export import export_assembly_stats, write_contigs_fasta
    from .utils.sequence_utils import shortest_read_length

    config = _load_checked_config(config_file, {
        'assembly.kmer_size': kmer_size,
        'assembly.max_paths': max_paths,
        'streaming.enabled': True if stream else None,
        'output.format': output_format,
    })
    _configure_logging(ctx, config)

    k = config['assembly']['kmer_size']
    max_paths = None if no_path_limit else config['assembly']['max_paths']

    try:
        reads = read_sequences(input_file)
    except Exception as e:
        click.echo(f"✗ Error reading {input_file}: {e}", err=True)
        sys.exit(1)

    shortest = shortest_read_length(reads)
    if reads and k > shortest:
        logger.warning(f"k={k} exceeds the shortest read ({shortest} bp); those reads add no k-mers")

    overlap_graph = OverlapGraphBuilder(k).build_from_reads(reads)

    if config['streaming']['enabled']:
        worker = ContigWorker(max_paths=max_paths, queue_size=config['streaming']['queue_size'])
        channel = worker.submit(overlap_graph.edges.values(), k)
        collector = ContigCollector(k)
        try:
            for message in channel:
                if isinstance(message, ContigFound) and collector.add(message.contig) and not output:
                    click.echo(message.contig)
        except ChannelFailed as e:
            click.echo(f"✗ Contig enumeration failed: {e}", err=True)
            sys.exit(1)
        contigs = collector.snapshot()
    else:
        contigs = get_contigs(overlap_graph, k, max_paths=max_paths)
        if not output:
            for contig in contigs:
                click.echo(contig)

    try:
        if output:
            if config['output']['format'] == 'fasta':
                write_contigs_fasta(contigs, output, line_width=config['output']['line_width'])
            else:
                Path(output).write_text(''.join(f"{c}\n" for c in contigs))
            logger.info(f"✓ {len(contigs)} contigs written to {output}")

        if stats_file:
            export_assembly_stats(contigs, stats_file, graph=overlap_graph)
    except Exception as e:
        click.echo(f"✗ Error writing results: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True),
              help='Reads file (FASTA, FASTQ or one read per line)')
@click.option('--kmer-size', '-k', type=int, default=None, help='k-mer size')
@click.option('--output', '-o', type=click.Path(), help='Export the graph as GFA')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.pass_context
def graph(ctx, input_file, kmer_size, output, config_file):
    """Build the overlap graph and summarise (or export) it."""
    from .assembly_core.dbg_engine_module import OverlapGraphBuilder
    from .io.io_core_module import read_sequences
    from .io_utils.assembly_export import export_graph_to_gfa

    config = _load_checked_config(config_file, {'assembly.kmer_size': kmer_size})
    _configure_logging(ctx, config)
    k = config['assembly']['kmer_size']

    try:
        reads = read_sequences(input_file)
    except Exception as e:
        click.echo(f"✗ Error reading {input_file}: {e}", err=True)
        sys.exit(1)

    overlap_graph = OverlapGraphBuilder(k).build_from_reads(reads)
    display_edges = overlap_graph.display_edges()

    click.echo(f"Nodes: {len(overlap_graph.nodes)}")
    click.echo(f"Edges: {len(overlap_graph.edges)} ({len(display_edges)} distinct)")
    click.echo(f"Starting nodes: {len(overlap_graph.starting_nodes())}")

    if ctx.obj.get('VERBOSE'):
        for edge in display_edges:
            source = overlap_graph.nodes[edge.from_id].label
            target = overlap_graph.nodes[edge.to_id].label
            click.echo(f"  {source} -> {target}  {edge.display_label}")

    if output:
        try:
            export_graph_to_gfa(overlap_graph, output)
        except Exception as e:
            click.echo(f"✗ Error writing {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"✓ Graph written to {output}")


@main.command()
@click.option('--genome', '-g', type=str, default=None,
              help='Genome sequence to sample (default: random)')
@click.option('--length', '-l', 'genome_length', type=int, default=None,
              help='Length of the random genome')
@click.option('--num-reads', '-n', type=int, default=None, help='Number of reads')
@click.option('--min-read-length', '-m', type=int, default=None, help='Minimum read length')
@click.option('--noise', 'noise_reads', type=int, default=None,
              help='Number of noise reads from shuffled genomes')
@click.option('--seed', type=int, default=None, help='Random seed')
@click.option('--output', '-o', required=True, type=click.Path(), help='Output FASTA for reads')
@click.option('--genome-output', type=click.Path(), help='Also write the genome as FASTA')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.pass_context
def simulate(ctx, genome, genome_length, num_reads, min_read_length, noise_reads, seed,
             output, genome_output, config_file):
    """Simulate reads from a given or random genome."""
    import random
    from .io.io_core_module import write_fasta, write_reads_fasta
    from .simulation.read_simulator import generate_random_dna, make_reads

    overrides = {
        'simulation.genome_length': genome_length if genome is None else len(genome),
        'simulation.num_reads': num_reads,
        'simulation.min_read_length': min_read_length,
        'simulation.noise_reads': noise_reads,
        'simulation.random_seed': seed,
    }
    config = _load_checked_config(config_file, overrides)
    _configure_logging(ctx, config)
    sim = config['simulation']

    rng = random.Random(sim['random_seed'])
    if genome is None:
        genome = generate_random_dna(sim['genome_length'], rng)

    try:
        reads = make_reads(genome, sim['num_reads'], sim['min_read_length'],
                           sim['noise_reads'], rng)
    except ValueError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    try:
        write_reads_fasta(reads, output)
        click.echo(f"✓ {len(reads)} reads written to {output}")

        if genome_output:
            write_fasta([("genome", genome)], genome_output)
            click.echo(f"✓ Genome written to {genome_output}")
    except Exception as e:
        click.echo(f"✗ Error writing reads: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    sys.exit(main())
